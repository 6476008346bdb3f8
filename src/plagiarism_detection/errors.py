class PlagiarismDetectionError(Exception):
    """Base class for every error raised by the detection pipeline."""


class InvalidSourceError(PlagiarismDetectionError):
    def __init__(self, identifier: str, reason: str) -> None:
        super().__init__(f"{identifier}: {reason}")
        self.identifier = identifier
        self.reason = reason


class SourceUnavailableError(InvalidSourceError):
    """The source was nominated but could not be read at all."""


class NotAFileError(InvalidSourceError):
    """A directory entry that is neither a regular file nor a directory."""


class DegenerateDocumentError(PlagiarismDetectionError):
    def __init__(self, doc_id: str) -> None:
        super().__init__(f"{doc_id}: no shingles, too short to compare")
        self.doc_id = doc_id


class InvalidParameterError(PlagiarismDetectionError, ValueError):
    def __init__(self, parameter: str, reason: str) -> None:
        super().__init__(f"invalid {parameter}: {reason}")
        self.parameter = parameter
        self.reason = reason
