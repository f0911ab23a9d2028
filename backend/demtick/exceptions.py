# exceptions.py

class DemoParserException(Exception):
    """Base exception for demo parsing errors"""
    pass

class DemoParserCorruptedFileException(DemoParserException):
    """Exception for corrupted demo files"""
    pass

class UnexpectedEndOfData(DemoParserCorruptedFileException):
    """A read ran past the end of the demo buffer"""
    def __init__(self, offset: int, wanted: int, available: int):
        self.offset = offset
        self.wanted = wanted
        self.available = available
        super().__init__(
            f"Unexpected end of data at offset {offset}: "
            f"wanted {wanted} bytes, {available} available"
        )

class UnrecognizedTag(DemoParserCorruptedFileException):
    """Command tag outside the known set"""
    def __init__(self, tag: int, offset: int):
        self.tag = tag
        self.offset = offset
        super().__init__(f"No command implemented for {tag} (pos: {offset})")

class InvalidSignonLength(DemoParserCorruptedFileException):
    """Signon length that would not move the cursor past the signon tag"""
    def __init__(self, signon_length: int, offset: int):
        self.signon_length = signon_length
        self.offset = offset
        super().__init__(f"Invalid signon length {signon_length} for signon at offset {offset}")
