from errors import UnmatchedCloseDelimiter, UnmatchedOpenDelimiter
from preprocessor import NO_TARGET, preprocess
from program import Program


def expect_error(code: bytes, exc_type):
    try:
        preprocess(code)
    except exc_type as e:
        return e
    raise AssertionError(f"Expected {exc_type.__name__} for {code!r}")


def test_nested_and_sibling_loops():
    targets = preprocess(b"[[]][]")
    if targets != [3, 2, 1, 0, 5, 4]:
        raise AssertionError(f"Unexpected jump table: {targets}")


def test_pairs_are_bidirectional():
    code = b"+[>[-]<[->+<]]."
    targets = preprocess(code)
    for pos, byte in enumerate(code):
        if byte in b"[]":
            partner = targets[pos]
            if targets[partner] != pos:
                raise AssertionError(f"{pos} -> {partner} is not mirrored")
            if code[min(pos, partner)] != ord("[") or code[max(pos, partner)] != ord("]"):
                raise AssertionError(f"Bad pair ({pos}, {partner})")
        elif targets[pos] != NO_TARGET:
            raise AssertionError(f"Non-bracket position {pos} has a target")


def test_other_bytes_are_ignored():
    targets = preprocess(b"a[b]c")
    if targets != [NO_TARGET, 3, NO_TARGET, 1, NO_TARGET]:
        raise AssertionError(f"Unexpected jump table: {targets}")


def test_empty_program():
    if preprocess(b"") != []:
        raise AssertionError("Empty program should give an empty table")


def test_lone_close_at_start():
    e = expect_error(b"]", UnmatchedCloseDelimiter)
    if e.position != 0:
        raise AssertionError(f"Expected position 0, got {e.position}")
    if str(e) != "Unmatched ']' at position 0.":
        raise AssertionError(f"Unexpected message: {e}")


def test_extra_close_reports_its_position():
    e = expect_error(b"+[-]]>[", UnmatchedCloseDelimiter)
    if e.position != 4:
        raise AssertionError(f"Expected position 4, got {e.position}")


def test_unmatched_open_reports_top_of_stack():
    e = expect_error(b"[[]", UnmatchedOpenDelimiter)
    if e.position != 0:
        raise AssertionError(f"Expected position 0, got {e.position}")

    e = expect_error(b"[+[", UnmatchedOpenDelimiter)
    if e.position != 2:
        raise AssertionError(f"Expected position 2, got {e.position}")
    if str(e) != "Unmatched '[' at position 2.":
        raise AssertionError(f"Unexpected message: {e}")


def test_program_from_str_source():
    program = Program.from_source("+[-]")
    if program.code != b"+[-]":
        raise AssertionError(f"Unexpected code: {program.code!r}")
    if len(program) != 4:
        raise AssertionError("Program length should be 4")
    if program.target(1) != 3 or program.target(3) != 1:
        raise AssertionError("Brackets not matched through Program")


def test_program_target_on_plain_byte():
    program = Program.from_source(b"+[-]")
    try:
        program.target(0)
    except Exception as e:
        if "No jump target" not in str(e):
            raise AssertionError(f"Unexpected error: {e}")
    else:
        raise AssertionError("Expected an error for a non-bracket position")


if __name__ == "__main__":
    test_nested_and_sibling_loops()
    test_pairs_are_bidirectional()
    test_other_bytes_are_ignored()
    test_empty_program()
    test_lone_close_at_start()
    test_extra_close_reports_its_position()
    test_unmatched_open_reports_top_of_stack()
    test_program_from_str_source()
    test_program_target_on_plain_byte()
    print("ok")
