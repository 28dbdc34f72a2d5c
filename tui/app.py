"""
Main Textual application for Archive Overlap Analyzer.
"""
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Header, Footer, Button, Static, Input, Label, ListView, ListItem, ProgressBar, DataTable
from textual.binding import Binding
from textual.screen import Screen
from pathlib import Path
import logging
from typing import Optional

from overlap.models import AppConfig, SavingsReport, ScanProgress
from overlap.errors import OverlapError
from overlap.analyzer import OverlapAnalyzer
from overlap.report import format_size, short_name

logger = logging.getLogger(__name__)


class ConfigScreen(Screen):
    """Initial configuration screen."""

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("enter", "start_scan", "Start Scan"),
    ]

    def __init__(self, config: AppConfig):
        super().__init__()
        self.config = config

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Static("📦 Archive Overlap Analyzer", classes="header"),
            Label(""),
            Label("Source directories (archives to compare):"),
            ListView(
                *[ListItem(Label(f"  • {src}", classes="path-source")) for src in self.config.source_dirs],
                *[ListItem(Label(f"  • {arc}", classes="path-source")) for arc in self.config.archive_paths],
                id="source-list"
            ),
            Button("+ Add Source", id="add-source"),
            Label(""),
            Horizontal(
                Button("▶️  Analyze", id="start-btn", variant="primary"),
                Button("❌ Quit", id="quit-btn", variant="error"),
            ),
            id="config-container"
        )
        yield Footer()

    def on_screen_resume(self) -> None:
        source_list = self.query_one("#source-list", ListView)
        source_list.clear()
        for src in self.config.source_dirs + self.config.archive_paths:
            source_list.append(ListItem(Label(f"  • {src}", classes="path-source")))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "add-source":
            self.app.push_screen(DirectoryInputScreen("Add Source Directory", self.config))
        elif event.button.id == "start-btn":
            self.action_start_scan()
        elif event.button.id == "quit-btn":
            self.app.exit()

    def action_start_scan(self) -> None:
        """Start scanning."""
        if not self.config.source_dirs and not self.config.archive_paths:
            self.app.push_screen(MessageScreen("Error", "Please add at least one source directory."))
            return
        self.app.push_screen(ScanningScreen(self.config))


class DirectoryInputScreen(Screen):
    """Screen for inputting a directory path."""

    def __init__(self, title: str, config: AppConfig):
        super().__init__()
        self.title = title
        self.config = config

    def compose(self) -> ComposeResult:
        yield Container(
            Label(self.title),
            Input(placeholder="Enter directory path...", id="dir-input"),
            Horizontal(
                Button("Add", id="add-btn", variant="primary"),
                Button("Cancel", id="cancel-btn"),
            ),
        )

    def add_path(self, path: str) -> bool:
        """Add a source directory, or a single archive file. Returns False for bad paths."""
        path = path.strip()
        if not path:
            return False
        target = Path(path)
        if target.is_dir():
            if path not in self.config.source_dirs:
                self.config.source_dirs.append(path)
            return True
        if target.is_file():
            if path not in self.config.archive_paths:
                self.config.archive_paths.append(path)
            return True
        return False

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "add-btn":
            input_widget = self.query_one("#dir-input", Input)
            if self.add_path(input_widget.value):
                self.app.pop_screen()
            else:
                self.app.push_screen(MessageScreen("Error", "Invalid or non-existent path."))
        elif event.button.id == "cancel-btn":
            self.app.pop_screen()


class ScanningScreen(Screen):
    """Screen showing scan progress."""

    def __init__(self, config: AppConfig):
        super().__init__()
        self.config = config
        self.report: Optional[SavingsReport] = None
        self.error: Optional[str] = None

    def compose(self) -> ComposeResult:
        yield Container(
            Static("🔍 Scanning...", classes="header"),
            Label(""),
            Label("Indexing archives...", id="phase-label", classes="status-scanning"),
            ProgressBar(total=100, show_eta=True, id="progress"),
            Label("", id="status-label"),
            Label("", id="current-file-label"),
            Label(""),
            Button("❌ Cancel", id="action-btn"),
        )

    async def on_mount(self) -> None:
        """Start scanning when screen is mounted."""
        await self.run_scan()

    def update_progress(self, progress: ScanProgress) -> None:
        self.query_one("#status-label", Label).update(
            f"Archives: {progress.archives_processed}/{progress.total_archives}"
        )
        if progress.current_archive:
            self.query_one("#current-file-label", Label).update(f"Current: {progress.current_archive}")
        self.query_one("#progress", ProgressBar).update(progress=progress.progress_pct)

    async def run_scan(self) -> None:
        """Run the analysis."""
        try:
            analyzer = OverlapAnalyzer(self.config, progress_callback=self.update_progress)
            self.report = analyzer.run()
        except OverlapError as e:
            logger.error(f"Analysis failed: {e}")
            self.error = str(e)
            self.query_one("#phase-label", Label).update(f"❌ Error: {e}")
            return

        self.query_one("#phase-label", Label).update("✅ Analysis complete!")
        self.query_one("#progress", ProgressBar).update(progress=100)
        self.query_one("#status-label", Label).update(
            f"{len(self.report.pairs)} overlapping pairs across {len(self.report.archives)} archives"
        )

        self.query_one("#action-btn", Button).label = "Continue →"

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id != "action-btn":
            return
        if self.report is None:
            self.app.pop_screen()
        else:
            self.app.push_screen(ReportScreen(self.report, top=self.config.top_entries))


class ReportScreen(Screen):
    """Tables of pair overlap, per-archive duplication and wasteful entries."""

    BINDINGS = [
        Binding("b", "back", "Back"),
    ]

    def __init__(self, report: SavingsReport, top: int = 10):
        super().__init__()
        self.report = report
        self.top = top

    def compose(self) -> ComposeResult:
        savings = self.report.savings
        yield Container(
            Static("📋 Overlap Report", classes="header"),
            Label(
                f"Total deduplicatable: {format_size(savings.total_savable)} of "
                f"{format_size(savings.total_bytes)} ({savings.percent_reduction:.2f}% reduction)",
                id="totals-label",
                classes="highlight-size"
            ),
            Label("Archive pairs:"),
            DataTable(id="pairs-table"),
            Label("Archives:"),
            DataTable(id="archives-table"),
            Label("Most duplicated entries:"),
            DataTable(id="entries-table"),
            Horizontal(
                Button("← Back", id="back-btn"),
            ),
        )

    def on_mount(self) -> None:
        pairs = self.query_one("#pairs-table", DataTable)
        pairs.add_columns("Archive A", "Archive B", "Shared paths", "Duplicated")
        for pair in self.report.pairs:
            pairs.add_row(
                short_name(pair.archive_a),
                short_name(pair.archive_b),
                str(pair.shared_count),
                format_size(pair.shared_bytes)
            )

        archives = self.query_one("#archives-table", DataTable)
        archives.add_columns("Archive", "Total", "In other archives", "%")
        for stat in self.report.savings.archive_stats:
            archives.add_row(
                stat.name,
                format_size(stat.total),
                format_size(stat.dup),
                f"{stat.percent:.2f}"
            )

        entries = self.query_one("#entries-table", DataTable)
        entries.add_columns("Entry", "Copies", "Savable")
        for entry in self.report.top_entries(self.top):
            entries.add_row(entry.name, str(entry.occurrences), format_size(entry.savable))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "back-btn":
            self.action_back()

    def action_back(self) -> None:
        self.app.pop_screen()


class MessageScreen(Screen):
    """Simple message display screen."""

    def __init__(self, title: str, message: str):
        super().__init__()
        self.title = title
        self.message = message

    def compose(self) -> ComposeResult:
        yield Container(
            Static(self.title, classes="header"),
            Label(""),
            Label(self.message),
            Label(""),
            Button("OK", id="ok-btn", variant="primary"),
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.app.pop_screen()


class OverlapApp(App):
    """Main application."""

    CSS_PATH = "styles.tcss"
    TITLE = "Archive Overlap Analyzer"

    def __init__(self, config: AppConfig):
        super().__init__()
        self.config = config

    def on_mount(self) -> None:
        self.push_screen(ConfigScreen(self.config))
