from preprocessor import NO_TARGET, preprocess


class Program:
    def __init__(self, code: bytes, targets: list[int]):
        self._code = bytes(code)              # source text, never changed after load
        self._targets = tuple(targets)        # bracket position -> partner position

    @classmethod
    def from_source(cls, source):
        # str sources are treated as UTF-8; only ASCII bytes carry meaning anyway
        if isinstance(source, str):
            source = source.encode("utf-8")
        code = bytes(source)
        return cls(code, preprocess(code))

    @property
    def code(self) -> bytes:
        return self._code

    @property
    def targets(self) -> tuple:
        return self._targets

    def target(self, pos: int) -> int:
        partner = self._targets[pos]
        if partner == NO_TARGET:
            raise Exception(f"No jump target at position {pos}")
        return partner

    def __len__(self) -> int:
        return len(self._code)

    def __repr__(self) -> str:
        return f"Program({len(self._code)} bytes)"
