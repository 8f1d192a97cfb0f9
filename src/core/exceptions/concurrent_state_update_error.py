class ConcurrentStateUpdateError(Exception):
    """Raised when a service row changed between reading its state and writing the new one."""

    def __init__(self, service_id: int, expected_version: int):
        self.service_id = service_id
        self.expected_version = expected_version
        super().__init__(f"Service {service_id} was updated concurrently (expected state version {expected_version})")
