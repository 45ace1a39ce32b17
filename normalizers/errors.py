from typing import Optional


class TableBuildError(Exception):
    """Base class for everything the table pipeline raises."""


# ---------------- page level (fatal) ----------------

class FetchError(TableBuildError):
    pass


class NoTableFound(TableBuildError):

    def __init__(self, selector: str):
        super().__init__(f"No table matches selector {selector!r}")
        self.selector = selector


# ---------------- row level (recovered) ----------------

class RowError(TableBuildError):

    def __init__(self, message: str, text: Optional[str] = None):
        super().__init__(message)
        self.text = text


class MalformedRecord(RowError):
    pass


class UnparseableYear(RowError):
    pass
