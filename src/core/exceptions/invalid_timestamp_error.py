class InvalidTimestampError(ValueError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid timestamp '{value}', expected 'YYYY-MM-DD HH:MM:SS' in UTC")
