"""Process entry point: read input, compile, execute, write output."""

from __future__ import annotations

import shutil
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from sed_engine.buffer import BufferReadError, LineBuffer
from sed_engine.engine import ExecutionError, execute
from sed_engine.runtime import telemetry
from sed_engine.script import ScriptError, compile_script

from .options import PROG, SedOptions, parse_args


def run(options: SedOptions, *, stdin: TextIO, stdout: TextIO) -> int:
    fragments = options.load_fragments()
    if options.files:
        buffer = LineBuffer.from_files(options.files)
    else:
        buffer = LineBuffer.from_stream(stdin)

    program = compile_script(fragments, buffer)
    output = "".join(execute(program, buffer, quiet=options.quiet))

    if options.in_place is None:
        stdout.write(output)
        return 0

    target = Path(options.files[0])
    if options.in_place:
        backup = target.with_name(f"{target.name}.{options.in_place}")
        shutil.copyfile(target, backup)
    target.write_text(output, encoding="utf-8")
    telemetry.record_event(
        "cli.in_place", level="debug", data={"path": str(target)}
    )
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    options = parse_args(argv)
    if options.debug:
        telemetry.configure(debug=True)
    try:
        return run(options, stdin=sys.stdin, stdout=sys.stdout)
    except (ScriptError, ExecutionError, BufferReadError, OSError) as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - manual entry
    raise SystemExit(main())
