class BfError(Exception):
    pass


class BfRuntimeError(BfError):
    def __init__(self, message: str, ip: int | None = None, ptr: int | None = None):
        super().__init__(message)
        self.message = message
        self.ip = ip
        self.ptr = ptr

    def format(self, indent: str = "") -> str:
        lines = [f"{indent}Runtime error: {self.message}"]
        if self.ip is not None:
            loc = f"{indent}  ip={self.ip:04d}"
            if self.ptr is not None:
                loc += f" ptr={self.ptr}"
            lines.append(loc)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format()


class MemoryUnderflow(BfRuntimeError):
    def __init__(self, ip: int | None = None, ptr: int | None = None):
        super().__init__("Memory pointer moved below cell 0.", ip=ip, ptr=ptr)


class AllocationFailure(BfRuntimeError):
    def __init__(self, size: int, ip: int | None = None, ptr: int | None = None):
        super().__init__(f"Can't allocate memory for {size} cells.", ip=ip, ptr=ptr)
        self.size = size


class UnmatchedDelimiter(BfError):
    delimiter = "?"

    def __init__(self, position: int):
        super().__init__(position)
        self.position = position

    def __str__(self) -> str:
        return f"Unmatched '{self.delimiter}' at position {self.position}."


class UnmatchedOpenDelimiter(UnmatchedDelimiter):
    delimiter = "["


class UnmatchedCloseDelimiter(UnmatchedDelimiter):
    delimiter = "]"


class SourceUnavailable(BfError):
    def __init__(self, path: str, reason: str | None = None):
        super().__init__(path)
        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        if self.reason:
            return f"Can't open file: \"{self.path}\" ({self.reason})."
        return f"Can't open file: \"{self.path}\"."
