"""
Output - Console output formatting for status and push reports.

Text output uses colors and symbols when stdout is a terminal; with
``--output json`` each command prints a single JSON document instead.
"""

import json
import sys
from typing import Any

from linearctl.application.sync import PushResult, ReconciliationResult
from linearctl.core.domain.enums import EntryState


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"

    BG_YELLOW = "\033[43m"


class Symbols:
    """Unicode symbols for terminal output."""

    CHECK = "✓"
    CROSS = "✗"
    ARROW = "→"
    DOT = "•"
    PLUS = "+"
    WARN = "⚠"
    INFO = "ℹ"
    GEAR = "⚙"
    CLOUD = "☁"

    BOX_H = "─"


class Console:
    """
    Console output helper with colors and formatting.

    Attributes:
        color: Whether to use ANSI color codes.
        verbose: Whether to print debug messages.
        quiet: Whether to suppress most output (for CI/scripting).
        json_mode: Whether to output JSON format for programmatic use.
    """

    def __init__(
        self,
        color: bool = True,
        verbose: bool = False,
        quiet: bool = False,
        json_mode: bool = False,
    ):
        """
        Initialize the console output helper.

        Args:
            color: Enable colored output. Automatically disabled if stdout is not a TTY.
            verbose: Enable verbose debug output.
            quiet: Suppress most output, only show errors and final summary.
            json_mode: Output JSON format instead of text.
        """
        self.json_mode = json_mode
        self.color = color and sys.stdout.isatty() and not json_mode
        self.verbose = verbose
        self.quiet = quiet or json_mode  # JSON mode implies quiet for intermediate output

        # JSON mode collects errors for the final document
        self._json_errors: list[str] = []

        if self.quiet:
            self.verbose = False

    def _c(self, text: str, *codes: str) -> str:
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET

    def print(self, text: str = "", force: bool = False) -> None:
        """
        Print text to stdout.

        Args:
            text: Text to print. Defaults to empty string for blank line.
            force: Print even in quiet mode.
        """
        if self.quiet and not force:
            return
        print(text)

    def header(self, text: str) -> None:
        """Print a prominent header with borders."""
        if self.quiet:
            return
        width = max(len(text) + 4, 50)
        border = Colors.CYAN + Symbols.BOX_H * width + Colors.RESET if self.color else "-" * width

        self.print()
        self.print(border)
        self.print(self._c(f"  {text}", Colors.BOLD, Colors.CYAN))
        self.print(border)
        self.print()

    def section(self, text: str) -> None:
        if self.quiet:
            return
        self.print()
        self.print(self._c(f"{Symbols.ARROW} {text}", Colors.BOLD, Colors.BLUE))

    def success(self, text: str) -> None:
        if self.quiet:
            return
        self.print(self._c(f"  {Symbols.CHECK} {text}", Colors.GREEN))

    def error(self, text: str) -> None:
        """
        Print an error message with cross symbol.

        Always prints, even in quiet mode. Collected in JSON mode.
        """
        if self.json_mode:
            self._json_errors.append(text)
            return
        print(self._c(f"  {Symbols.CROSS} {text}", Colors.RED), file=sys.stderr)

    def error_rich(self, exc: BaseException) -> None:
        """
        Print a formatted error with suggestions for the exception type.

        In JSON mode a single ``{"success": false, "error": ...}`` document
        is printed so scripts always get parseable output.
        """
        from .errors import ErrorFormatter, format_error

        if self.json_mode:
            formatted = ErrorFormatter(color=False).format(exc)
            self.json(
                {
                    "success": False,
                    "error": {
                        "code": formatted.code.value,
                        "title": formatted.title,
                        "message": str(exc),
                    },
                }
            )
            return

        print(format_error(exc, color=self.color, verbose=self.verbose), file=sys.stderr)

    def config_errors(self, errors: list[str]) -> None:
        """Print configuration validation errors. Always prints."""
        from .errors import format_config_errors

        if self.json_mode:
            self.json({"success": False, "errors": errors})
            return

        print(format_config_errors(errors, color=self.color), file=sys.stderr)

    def warning(self, text: str) -> None:
        if self.quiet:
            return
        self.print(self._c(f"  {Symbols.WARN} {text}", Colors.YELLOW))

    def info(self, text: str) -> None:
        if self.quiet:
            return
        self.print(self._c(f"  {Symbols.INFO} {text}", Colors.CYAN))

    def detail(self, text: str) -> None:
        if self.quiet:
            return
        self.print(self._c(f"    {text}", Colors.DIM))

    def debug(self, text: str) -> None:
        """Print debug message (only visible in verbose mode)."""
        if self.verbose:
            self.print(self._c(f"  [DEBUG] {text}", Colors.DIM))

    def item(self, text: str, status: str | None = None) -> None:
        """
        Print a list item with optional status indicator.

        Args:
            text: Item text to display.
            status: Optional status string. Special values:
                - "ok": Shows green checkmark
                - "new": Shows yellow plus
                - "fail": Shows red cross
                - Any other string: Shows dimmed label
        """
        if self.quiet:
            return
        status_str = ""
        if status == "ok":
            status_str = self._c(f" [{Symbols.CHECK}]", Colors.GREEN)
        elif status == "new":
            status_str = self._c(f" [{Symbols.PLUS}]", Colors.YELLOW)
        elif status == "fail":
            status_str = self._c(f" [{Symbols.CROSS}]", Colors.RED)
        elif status:
            status_str = self._c(f" [{status}]", Colors.DIM)

        self.print(f"    {Symbols.DOT} {text}{status_str}")

    def table(self, headers: list[str], rows: list[list[str]]) -> None:
        """
        Print a formatted table with headers.

        Column widths are computed from the content.
        """
        if self.quiet:
            return
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(str(cell)))

        header_line = "  " + "  ".join(
            self._c(h.ljust(widths[i]), Colors.BOLD) for i, h in enumerate(headers)
        )
        self.print(header_line)
        self.print("  " + "  ".join("-" * w for w in widths))

        for row in rows:
            row_line = "  " + "  ".join(
                str(cell).ljust(widths[i]) if i < len(widths) else str(cell)
                for i, cell in enumerate(row)
            )
            self.print(row_line)

    def dry_run_banner(self) -> None:
        """Print a prominent dry-run mode banner."""
        if self.quiet:
            return
        self.print()
        banner = f"  {Symbols.GEAR} DRY-RUN MODE - No projects will be created"
        if self.color:
            self.print(f"{Colors.BG_YELLOW}{Colors.BOLD}{banner}{Colors.RESET}")
        else:
            self.print(f"*** {banner} ***")
        self.print()

    def json(self, payload: dict[str, Any]) -> None:
        """Print a JSON document, always, regardless of quiet mode."""
        print(json.dumps(payload, indent=2))

    def reconciliation_report(
        self, result: ReconciliationResult, missing_only: bool = False
    ) -> None:
        """
        Print the three-way classification from ``sync status``.

        With ``missing_only`` only the local-only folders are listed.
        In quiet mode a single summary line is printed.
        """
        if self.json_mode:
            payload = result.to_dict()
            if missing_only:
                payload = {
                    "team_id": payload["team_id"],
                    "match_mode": payload["match_mode"],
                    "local_only": payload["local_only"],
                }
            self.json(payload)
            return

        if self.quiet:
            print(
                f"synced={len(result.matched)} local_only={len(result.local_only)} "
                f"remote_only={len(result.remote_only)}"
            )
            return

        if missing_only:
            self.section(f"Missing in Linear ({len(result.local_only)})")
            if not result.local_only:
                self.success("Every local folder has a Linear project")
            for folder in result.local_only:
                self.item(folder.name, "new")
            return

        counts = result.counts
        self.section(f"{EntryState.MATCHED.display_name} ({counts[EntryState.MATCHED]})")
        for entry in result.matched:
            git = self._c(" (git)", Colors.DIM) if entry.local.has_git else ""
            self.item(f"{entry.name}{git}", "ok")

        self.section(f"{EntryState.LOCAL_ONLY.display_name} ({counts[EntryState.LOCAL_ONLY]})")
        for folder in result.local_only:
            git = self._c(" (git)", Colors.DIM) if folder.has_git else ""
            self.item(f"{folder.name}{git}", "new")

        self.section(f"{EntryState.REMOTE_ONLY.display_name} ({counts[EntryState.REMOTE_ONLY]})")
        for project in result.remote_only:
            self.item(project.name, Symbols.CLOUD)

        self.print()
        self.table(
            ["State", "Count"],
            [[state.display_name, str(count)] for state, count in counts.items()],
        )
        self.print()
        if result.in_sync:
            self.success("All local folders are synced")
        else:
            self.info(f"Run 'linearctl sync push' to create {len(result.local_only)} project(s)")

    def push_report(self, result: PushResult) -> None:
        """
        Print the outcome of ``sync push``.

        Failed creations are always printed, even in quiet mode.
        """
        if self.json_mode:
            payload = result.to_dict()
            payload["errors"] = result.errors + self._json_errors
            self.json(payload)
            return

        if self.quiet:
            mode = "dry-run" if result.dry_run else "executed"
            count = len(result.planned) if result.dry_run else len(result.created)
            print(
                f"status={'OK' if result.success else 'PARTIAL'} mode={mode} "
                f"created={count} failed={len(result.failed)} "
                f"synced={len(result.reconciliation.matched)}"
            )
            for failure in result.failed:
                print(f"ERROR: {failure}", file=sys.stderr)
            return

        for name in result.unknown_only:
            self.warning(f"'{name}' is not a local-only folder; ignored")

        if not result.planned:
            self.print()
            self.success("Nothing to create, all selected folders are synced")
            return

        if result.dry_run:
            self.section(f"Would create {len(result.planned)} project(s)")
            for folder in result.planned:
                self.item(folder.name, "new")
                self.detail(folder.path)
            return

        self.section("Push Complete")
        for folder, project in result.created:
            self.item(folder.name, "ok")
            if project.url:
                self.detail(project.url)
        for failure in result.failed:
            self.item(failure.folder.name, "fail")
            self.detail(failure.error)

        self.print()
        self.table(
            ["Result", "Count"],
            [
                ["Created", str(len(result.created))],
                ["Failed", str(len(result.failed))],
                ["Skipped", str(len(result.skipped))],
            ],
        )
        self.print()
        if result.success:
            self.success(f"Created {len(result.created)} project(s)")
        else:
            self.error(f"{len(result.failed)} of {len(result.planned)} creation(s) failed")
