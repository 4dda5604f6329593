"""Identity domain exceptions."""


class StoreFailure(Exception):  # NOQA: N818
    """The identity store could not complete an operation.

    ``integrity_violation`` is True when the storage engine rejected the
    write because of a constraint. The store does not say which one.
    """

    def __init__(self, message: str, integrity_violation: bool = False) -> None:
        self.message = message
        self.integrity_violation = integrity_violation
        super().__init__(message)
