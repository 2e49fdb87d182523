"""
Exception hierarchy for assetrev

Library code raises these; only the CLI pipeline stages catch them and turn
them into an error message plus a non-zero exit status.
"""


class AssetRevError(Exception):
    """Base class for every error raised by assetrev"""
    pass


class ConfigError(AssetRevError):
    """Raised when a Processor or PatternCatalog is constructed with bad arguments"""
    pass


class BlockNotFoundError(AssetRevError):
    """Raised in strict mode when a block's raw text is missing from the document"""

    def __init__(self, dest: str, search: str):
        self.dest = dest
        self.search = search
        super().__init__(
            f"Block for '{dest}' not found in document. "
            f"Expected literal text:\n{search}"
        )


class BlockParseError(AssetRevError):
    """Raised when build:/endbuild markers cannot be turned into a Block"""

    def __init__(self, message: str, line_number: int):
        self.line_number = line_number
        super().__init__(f"{message} (line {line_number})")


class ManifestError(AssetRevError):
    """Raised when a rev manifest cannot be read or has the wrong shape"""
    pass


class AssetNotFoundError(AssetRevError):
    """Raised by a strict ManifestFinder when a reference has no revved version"""

    def __init__(self, path: str, candidates: list):
        self.path = path
        self.candidates = candidates
        super().__init__(
            f"No revved version of '{path}' "
            f"(looked for: {', '.join(candidates) or 'nothing'})"
        )
