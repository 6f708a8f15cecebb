from pydantic import BaseModel


class FileError(BaseModel):
    path: str
    error: str


class BatchReport(BaseModel):
    source: str
    assets: str
    converted: int = 0
    errors: list[FileError] = []
    duration: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.errors
