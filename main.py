import logging
try:
    import pyperclip
except ImportError:
    pyperclip = None

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.logging import TextualHandler
from textual.widgets import Footer, Header, Input

from config import Config
from models import ViewMode
from reconciler import SelectionReconciler
from services import ArtistSearchTransport, SelectionStore
from ui import ArtistTable, LogPane, ModeBar, SearchControls

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Routes log records to the Textual devtools console."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        handlers=[TextualHandler()],
        format="%(name)s: %(message)s",
    )


class ArtistSelectorApp(App):
    BINDINGS = [
        ("d", "toggle_dark", "Toggle dark mode"),
        ("q", "quit", "Quit"),
        ("s", "switch_mode", "Switch View"),
        ("r", "reset", "Reset"),
        ("c", "copy_selected", "Copy Selected"),
    ]
    CSS = """
    #main-container { height: 1fr; }
    SearchControls { height: auto; padding: 0 1; }
    #mode-bar { layout: horizontal; height: auto; padding: 0 1; }
    #mode-bar Button { margin-right: 2; }
    #artist-table { height: 1fr; }
    #log { height: 8; border-top: solid $accent; }
    """

    def __init__(self, reconciler: SelectionReconciler, config: Config):
        super().__init__()
        self.reconciler = reconciler
        self.config = config

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main-container"):
            yield SearchControls()
            yield ModeBar(id="mode-bar")
            yield ArtistTable(id="artist-table")
            yield LogPane(id="log", wrap=True, highlight=True, markup=True)
        yield Footer()

    def on_mount(self) -> None:
        log = self.query_one(LogPane)
        self.query_one(Input).focus()
        if pyperclip:
            log.add_message("[green]✅ Clipboard found.[/green]")
        else:
            log.add_message("[yellow]⚠️ 'pyperclip' not installed.[/yellow]")
        log.add_message(
            f"Type at least {self.config.MIN_QUERY_LENGTH} characters to search artists."
        )
        self.refresh_view()

    def refresh_view(self) -> None:
        """Re-reads the reconciler state and pushes it to the widgets."""
        self.query_one(ArtistTable).update_artists(self.reconciler.displayed)
        self.query_one(ModeBar).update_affordances(self.reconciler.affordances)
        self.sub_title = "Selected" if self.reconciler.mode is ViewMode.SELECTED else "Results"

    # --- Actions ---
    def action_switch_mode(self) -> None:
        if not self.reconciler.affordances.show_enabled:
            return
        self.reconciler.switch_mode()
        self.refresh_view()

    def action_reset(self) -> None:
        self.workers.cancel_group(self, "search_worker")
        self.reconciler.reset()
        self.query_one(SearchControls).clear()
        self.refresh_view()
        self.query_one(LogPane).add_message("🧹 Selection cleared.")

    def action_copy_selected(self) -> None:
        log = self.query_one(LogPane)
        if not pyperclip:
            log.add_message("[red]❌ 'pyperclip' not installed.[/red]")
            return
        selected = self.reconciler.selected
        if not selected:
            log.add_message("[yellow]⚠️ No artist selected.[/yellow]")
            return
        pyperclip.copy("\n".join(a.title for a in selected))
        log.add_message(f"📋 Copied {len(selected)} selected artists.")

    # --- Message Handlers ---
    def on_search_controls_search_requested(self, message: SearchControls.SearchRequested) -> None:
        self.workers.cancel_group(self, "search_worker")
        self.run_worker(self.perform_search(message.query), group="search_worker", exclusive=True)

    def on_mode_bar_show_requested(self, message: ModeBar.ShowRequested) -> None:
        self.action_switch_mode()

    def on_mode_bar_reset_requested(self, message: ModeBar.ResetRequested) -> None:
        self.action_reset()

    def on_artist_table_row_toggled(self, message: ArtistTable.RowToggled) -> None:
        current = next((a for a in self.reconciler.displayed if a.id == message.artist_id), None)
        if current is None:
            logger.warning("Toggled row %s is no longer displayed", message.artist_id)
            return
        updated = self.reconciler.update_select_status(current.id, not current.selected)
        if updated:
            verb = "Selected" if updated.selected else "Unselected"
            self.query_one(LogPane).add_message(f"{verb} '[b]{escape(updated.title)}[/b]'.")
        self.refresh_view()

    # --- Worker Methods ---
    async def perform_search(self, query: str) -> None:
        outcome = await self.reconciler.search(query)
        if outcome.superseded:
            return
        log = self.query_one(LogPane)
        if outcome.error:
            log.add_message("[red]❌ An error occurred during search.[/red]")
            log.add_message(f"[dim]{escape(outcome.error.description)}[/dim]")
            return

        self.refresh_view()
        if not self.reconciler.is_valid_query(query):
            return
        if not self.reconciler.results:
            log.add_message(f"🤷 No artists found for '{escape(query)}'.")
        else:
            log.add_message(f"🎨 Found {len(self.reconciler.results)} artists for '{escape(query)}'.")


def main() -> None:
    app_config = Config.from_env()
    setup_logging(app_config.LOG_LEVEL)
    transport = ArtistSearchTransport(
        app_config.API_BASE_URL,
        app_config.SEARCH_PATH,
        timeout=app_config.REQUEST_TIMEOUT_SECONDS,
    )
    reconciler = SelectionReconciler(transport, SelectionStore(), app_config)

    app = ArtistSelectorApp(reconciler, app_config)
    try:
        app.run()
    finally:
        transport.close()


if __name__ == "__main__":
    main()
