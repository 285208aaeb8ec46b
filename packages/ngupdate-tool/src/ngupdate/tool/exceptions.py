class UpdateToolError(Exception):
    pass


class InvalidEditError(UpdateToolError):
    """An edit refers to an offset outside of the file it targets."""

    def __init__(self, file_path: str, offset: int, length: int):
        self.file_path = file_path
        self.offset = offset
        super().__init__(
            f"Edit at offset {offset} is outside of '{file_path}' (length {length})."
        )


class TsconfigError(UpdateToolError):
    pass
