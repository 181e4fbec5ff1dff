class BFError(Exception):
    """Base class for every compile and run failure."""


class NonAsciiSource(BFError):
    def __init__(self):
        super().__init__("source code is not ASCII")


class NonAsciiInput(BFError):
    def __init__(self):
        super().__init__("program input is not ASCII")


class UnmatchedClosingBracket(BFError):
    def __init__(self, position):
        self.position = position
        super().__init__(f"unmatched ']' at offset {position}")


class UnmatchedOpeningBracket(BFError):
    def __init__(self, position):
        self.position = position
        super().__init__(f"unmatched '[' at offset {position}")


class InputExhausted(BFError):
    def __init__(self, ip):
        self.ip = ip
        super().__init__(f"not enough bytes in input (',' at op {ip})")
