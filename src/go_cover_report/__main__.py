from __future__ import annotations

from .cli import app


def main() -> None:
    """
    Console entrypoint for `go-cover-report`.

    All CLI definitions live in `go_cover_report.cli`.
    """
    app(prog_name="go-cover-report")


if __name__ == "__main__":
    main()
