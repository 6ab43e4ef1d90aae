import pytest

from sed_engine.script import (
    Address,
    Delete,
    InsertAfter,
    InsertBefore,
    Instruction,
    Print,
    PrintLineNumber,
    Program,
    Quit,
    Range,
    ScriptError,
    ScriptScanner,
    Single,
    Skip,
    Substitute,
    Write,
    compile_script,
    resolve_regex_address,
)

LINES = ("one\n", "two\n", "three\n")


def commands(program: Program) -> list[object]:
    return [instruction.command for instruction in program]


def addresses(program: Program) -> list[Address]:
    return [instruction.address for instruction in program]


def test_scanner_pushback_and_boundaries() -> None:
    scanner = ScriptScanner.from_fragments(["ab", "c"])

    assert scanner.source == "ab;c"
    assert scanner.next() == "a"
    assert scanner.next() == "b"
    assert scanner.at_boundary
    assert scanner.next() == ";"
    scanner.back()
    assert scanner.peek() == ";"
    scanner.next()
    assert scanner.next() == "c"
    assert scanner.at_end

    with pytest.raises(ScriptError):
        scanner.next()


def test_resolver_scans_from_first_line() -> None:
    assert resolve_regex_address("t", LINES) == 2
    assert resolve_regex_address("^th", LINES) == 3
    assert resolve_regex_address("nope", LINES) == 0


def test_resolver_rejects_malformed_pattern() -> None:
    with pytest.raises(ScriptError, match="Invalid regular expression"):
        resolve_regex_address("[", LINES)


def test_empty_script_compiles_to_empty_program() -> None:
    assert len(compile_script("", LINES)) == 0
    assert len(compile_script([], LINES)) == 0


def test_simple_commands_without_address() -> None:
    program = compile_script("d;p;n;=;q", LINES)

    assert commands(program) == [Delete(), Print(), Skip(), PrintLineNumber(), Quit()]
    assert all(address == Address() for address in addresses(program))


def test_single_line_address() -> None:
    program = compile_script("2d", LINES)

    assert program == Program((Instruction(Address(Single(2)), Delete()),))


def test_range_address_with_spaces() -> None:
    program = compile_script("1, 3 p", LINES)

    assert addresses(program) == [Address(Range(1, 3))]


def test_last_line_address() -> None:
    assert addresses(compile_script("$p", LINES)) == [Address(Single(3))]
    assert addresses(compile_script("2,$p", LINES)) == [Address(Range(2, 3))]


def test_last_line_address_on_empty_buffer_is_unresolved() -> None:
    assert addresses(compile_script("$p", ())) == [Address(Single(0))]


def test_regex_addresses_resolve_against_input() -> None:
    program = compile_script("/two/p;/one/,/three/d", LINES)

    assert addresses(program) == [Address(Single(2)), Address(Range(1, 3))]


def test_unmatched_regex_address_stays_unresolved() -> None:
    program = compile_script("/missing/,$d", LINES)

    assert addresses(program) == [Address(Range(0, 3))]


def test_negated_address() -> None:
    program = compile_script("2!d", LINES)

    assert addresses(program) == [Address(Single(2), negate=True)]


def test_address_binds_to_following_command_only() -> None:
    program = compile_script("2pd", LINES)

    assert addresses(program) == [Address(Single(2)), Address()]
    assert commands(program) == [Print(), Delete()]


def test_substitution_fields() -> None:
    program = compile_script("s/a/b/g", LINES)

    assert commands(program) == [Substitute("a", "b", "g")]


def test_substitution_custom_delimiter_stops_at_semicolon() -> None:
    program = compile_script("s|x|y|;p", LINES)

    assert commands(program) == [Substitute("x", "y", ""), Print()]


def test_substitution_flags_absorb_write_target() -> None:
    program = compile_script("1s/a/b/2p w out.txt", LINES)

    assert program[0] == Instruction(
        Address(Single(1)), Substitute("a", "b", "2p w out.txt")
    )


def test_substitution_with_fourth_field_is_rejected() -> None:
    with pytest.raises(ScriptError, match="invalid substitution command"):
        compile_script("s/a/b/g/x", LINES)


def test_unterminated_substitution_is_rejected() -> None:
    with pytest.raises(ScriptError, match="unterminated"):
        compile_script("s/a/b", LINES)
    with pytest.raises(ScriptError, match="unterminated"):
        compile_script("s", LINES)


def test_write_command_path() -> None:
    program = compile_script("w  out.txt ;p", LINES)

    assert commands(program) == [Write("out.txt"), Print()]


def test_write_command_requires_path() -> None:
    with pytest.raises(ScriptError, match="missing filename"):
        compile_script("w", LINES)
    with pytest.raises(ScriptError, match="missing filename"):
        compile_script("w ;p", LINES)


def test_insert_reads_rest_of_fragment() -> None:
    program = compile_script("1i  hello; world", LINES)

    assert commands(program) == [InsertBefore("hello; world\n")]


def test_insert_stops_at_fragment_boundary() -> None:
    program = compile_script(["$a tail", "p"], LINES)

    assert commands(program) == [InsertAfter("tail\n"), Print()]
    assert addresses(program) == [Address(Single(3)), Address()]


def test_semicolon_resets_pending_address() -> None:
    program = compile_script("2p;d", LINES)

    assert addresses(program) == [Address(Single(2)), Address()]


def test_address_without_command_before_semicolon_is_rejected() -> None:
    with pytest.raises(ScriptError, match="missing command"):
        compile_script("2;p", LINES)
    with pytest.raises(ScriptError, match="missing command"):
        compile_script(["/one/", "p"], LINES)


def test_trailing_address_is_dropped() -> None:
    assert len(compile_script("p;2", LINES)) == 1


def test_unknown_character_is_rejected() -> None:
    with pytest.raises(ScriptError, match="Invalid command: x") as excinfo:
        compile_script("1p;x", LINES)

    assert excinfo.value.position == 3


def test_malformed_regex_address_fails_compilation() -> None:
    with pytest.raises(ScriptError, match="Invalid regular expression"):
        compile_script("/[/p", LINES)


def test_compilation_is_deterministic() -> None:
    script = ["/two/,$s/o/0/g", "1!p", "$a done"]

    assert compile_script(script, LINES) == compile_script(script, LINES)
