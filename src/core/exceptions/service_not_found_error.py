class ServiceNotFoundError(Exception):
    def __init__(self, service_id: int):
        self.service_id = service_id
        super().__init__(f"Service {service_id} not found")
