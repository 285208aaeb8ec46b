class WorkspaceError(Exception):
    pass


class WorkspaceNotFoundError(WorkspaceError):
    def __init__(self, root: str):
        self.root = root
        super().__init__(
            f"Could not find workspace configuration file in '{root}'. "
            "Expected an angular.json or .angular.json at the workspace root."
        )
