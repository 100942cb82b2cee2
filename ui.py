from typing import List

from textual.app import ComposeResult
from textual.message import Message
from textual.widgets import Button, DataTable, Input, Label, RichLog, Static

from models import Artist, ModeAffordances

class SearchControls(Static):
    """Widget for the search input. Every edit requests a search."""
    class SearchRequested(Message):
        def __init__(self, query: str) -> None:
            self.query = query
            super().__init__()

    def compose(self) -> ComposeResult:
        yield Label("Search artists:")
        yield Input(placeholder="Search an artist name...", id="search-input")

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.post_message(self.SearchRequested(event.value.strip()))

    def clear(self) -> None:
        self.query_one(Input).value = ""


class ModeBar(Static):
    """The view switch button and the reset button."""
    class ShowRequested(Message):
        pass

    class ResetRequested(Message):
        pass

    def compose(self) -> ComposeResult:
        yield Button("0 Selected", id="show-button", disabled=True)
        yield Button("Reset", id="reset-button", variant="error")

    def on_mount(self) -> None:
        self.query_one("#reset-button", Button).display = False

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "show-button":
            self.post_message(self.ShowRequested())
        elif event.button.id == "reset-button":
            self.post_message(self.ResetRequested())

    def update_affordances(self, affordances: ModeAffordances) -> None:
        show_button = self.query_one("#show-button", Button)
        show_button.label = affordances.show_label
        show_button.disabled = not affordances.show_enabled
        self.query_one("#reset-button", Button).display = not affordances.reset_hidden


class ArtistTable(DataTable):
    """Widget for the artist list. Choosing a row toggles its selection."""
    class RowToggled(Message):
        def __init__(self, artist_id: int) -> None:
            self.artist_id = artist_id
            super().__init__()

    def on_mount(self) -> None:
        self.add_columns("✓", "Artist")
        self.cursor_type = "row"

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        if event.row_key.value is not None:
            self.post_message(self.RowToggled(int(event.row_key.value)))

    def update_artists(self, artists: List[Artist]) -> None:
        cursor_row = self.cursor_row
        self.clear()
        for a in artists:
            self.add_row("✓" if a.selected else "", a.title, key=str(a.id))
        if artists:
            self.move_cursor(row=min(cursor_row, len(artists) - 1))


class LogPane(RichLog):
    """A dedicated widget for logging application events."""
    def add_message(self, message: str) -> None:
        self.write(message)
