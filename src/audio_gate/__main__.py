"""``python -m audio_gate`` entry point."""

from __future__ import annotations

import sys


def _run_cli() -> int:
    from audio_gate import cli

    cli.main()
    return 0


if __name__ == "__main__":
    sys.exit(_run_cli())
