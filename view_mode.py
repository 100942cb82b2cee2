from models import ModeAffordances, ViewMode


class ViewModeController:
    """Tracks which list is on screen and what the mode bar should offer."""
    def __init__(self):
        self.mode = ViewMode.RESULTS

    def switch(self) -> ViewMode:
        self.mode = ViewMode.SELECTED if self.mode is ViewMode.RESULTS else ViewMode.RESULTS
        return self.mode

    def reset(self) -> None:
        self.mode = ViewMode.RESULTS

    def affordances(self, results_count: int, selected_count: int) -> ModeAffordances:
        """The switch button always advertises the size of the list not on screen."""
        if self.mode is ViewMode.RESULTS:
            count = selected_count
            enabled = count > 0
            label = f"Show Selected ({count})" if enabled else "0 Selected"
        else:
            count = results_count
            enabled = True
            label = f"Show Results ({count})"
        return ModeAffordances(
            show_label=label,
            show_enabled=enabled,
            reset_hidden=selected_count == 0,
        )
