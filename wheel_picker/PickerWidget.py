"""Jupyter host for a :class:`~wheel_picker.selection_controller.SelectionController`.

Each picker column is rendered as an ``ipywidgets.Select``. Settling a column
routes through the controller; the widget then re-reads the labels of every
column named in the returned :class:`RebuildRequest`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

import ipywidgets as widgets
import traitlets
from IPython.display import display

from .ColumnAdapter import ColumnAdapter
from .picker_localizations import localizations_for
from .selection_controller import RebuildRequest, SelectionController

# Module logger
# - Uses a NullHandler so importing this module never configures global logging.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class PickerDelimiter:
    """Static text drawn between two columns.

    Parameters
    ----------
    column : int
        Display position (0 = before the first displayed column). Positions
        are counted after ``reversed_order`` is applied.
    text : str, default=":"
        Text shown.
    width : str, default="16px"
        CSS width of the label.
    """

    column: int
    text: str = ":"
    width: str = "16px"


class PickerWidget(widgets.VBox):
    """
    A multi-column wheel picker for notebooks.

    Design notes
    ------------
    - Rows are addressed by index; labels are re-read from the controller
      only for the columns named in the rebuild request.
    - Writing the ``options`` of a ``Select`` fires its own observers, so
      every programmatic update runs under the ``_syncing`` guard.

    Parameters
    ----------
    adapter : ColumnAdapter
        Column data source.
    title : str, default=""
        Text shown between the Cancel and Confirm buttons.
    locale : str, optional
        Locale for the button captions.
    show_header : bool, default=True
        Whether to show the title bar.
    delimiters : sequence[PickerDelimiter], optional
        Static labels inserted between columns.
    rows : int, default=5
        Visible rows per column.
    **controller_options
        Forwarded to :class:`SelectionController` (``selected``,
        ``reset_descendants``, ``item_builder``, ``column_flex``,
        ``reversed_order``, ``debug``).

    Examples
    --------
    >>> picker = PickerWidget(ArrayColumnAdapter([["a", "b"], ["1", "2"]], independent=True))  # doctest: +SKIP
    >>> picker.on_confirm(lambda values, widget: print(values))  # doctest: +SKIP
    >>> picker  # doctest: +SKIP
    """

    selected = traitlets.List(traitlets.Int())
    text = traitlets.Unicode("")

    def __init__(
        self,
        adapter: ColumnAdapter,
        *,
        title: str = "",
        locale: Optional[str] = None,
        show_header: bool = True,
        delimiters: Sequence[PickerDelimiter] = (),
        rows: int = 5,
        **kwargs: Any,
    ) -> None:
        controller_keys = (
            "selected", "reset_descendants", "item_builder",
            "column_flex", "reversed_order", "debug",
        )
        controller_options = {k: kwargs.pop(k) for k in controller_keys if k in kwargs}
        self.controller = SelectionController(adapter, **controller_options)
        self._syncing = False
        self._confirm_callbacks: List[Callable[[List[Any], "PickerWidget"], Any]] = []
        self._cancel_callbacks: List[Callable[["PickerWidget"], Any]] = []

        tables = localizations_for(locale)
        self.btn_cancel = widgets.Button(description=tables.cancel, layout=widgets.Layout(width="auto"))
        self.btn_confirm = widgets.Button(
            description=tables.confirm, button_style="primary", layout=widgets.Layout(width="auto")
        )
        self.title_label = widgets.HTML(value=title)
        self.header = widgets.HBox(
            [self.btn_cancel, self.title_label, self.btn_confirm],
            layout=widgets.Layout(
                justify_content="space-between",
                align_items="center",
                display="flex" if show_header else "none",
            ),
        )

        # --- Columns ----------------------------------------------------------
        self.columns: List[widgets.Select] = []
        for column in range(self.controller.column_count):
            select = widgets.Select(
                options=(),
                rows=int(rows),
                layout=widgets.Layout(flex=f"{self.controller.column_flex(column)} 1 0%", width="auto"),
            )
            self.columns.append(select)

        self._delimiters: Dict[int, List[PickerDelimiter]] = {}
        for delimiter in delimiters:
            self._delimiters.setdefault(delimiter.column, []).append(delimiter)

        row_children: List[widgets.Widget] = []
        order = self.controller.display_columns()
        for position, column in enumerate(order):
            row_children.extend(self._delimiter_labels(position))
            row_children.append(self.columns[column])
        row_children.extend(self._delimiter_labels(len(order)))
        self.column_row = widgets.HBox(row_children, layout=widgets.Layout(align_items="center"))

        super().__init__([self.header, self.column_row], **kwargs)

        # --- Wiring -----------------------------------------------------------
        for column, select in enumerate(self.columns):
            select.observe(self._make_column_observer(column), names="index")
        self.btn_confirm.on_click(self._confirm)
        self.btn_cancel.on_click(self._cancel)

        self.refresh(self.controller.last_rebuild)

    def _delimiter_labels(self, position: int) -> List[widgets.Label]:
        return [
            widgets.Label(value=d.text, layout=widgets.Layout(width=d.width))
            for d in self._delimiters.get(position, ())
        ]

    def _make_column_observer(self, column: int) -> Callable[[Any], None]:
        def _observer(change: Any) -> None:
            self._on_index_change(column, change)

        return _observer

    # --- Sync -----------------------------------------------------------------

    def _on_index_change(self, column: int, change: Any) -> None:
        """Route a user selection to the controller and redraw stale columns."""
        if self._syncing or change.new is None:
            return
        request = self.controller.on_column_changed(column, int(change.new), raw=change)
        self.refresh(request)

    def refresh(self, request: Optional[RebuildRequest] = None) -> None:
        """Re-read the columns named in ``request`` (all columns when omitted)."""
        columns = range(self.controller.column_count) if request is None else request.columns
        selected = self.controller.selected
        self._syncing = True
        try:
            for column in columns:
                select = self.columns[column]
                select.options = [
                    (label, i) for i, label in enumerate(self.controller.labels(column))
                ]
                if select.options:
                    select.index = selected[column]
            for column, select in enumerate(self.columns):
                if select.options and select.index != selected[column]:
                    select.index = selected[column]
            self.selected = list(selected)
            self.text = self.controller.text()
        finally:
            self._syncing = False

    def notify_data_changed(self) -> None:
        """Redraw every column after the adapter's data or value changed."""
        self.refresh(self.controller.notify_data_changed())

    # --- Header ---------------------------------------------------------------

    def on_confirm(self, callback: Callable[[List[Any], "PickerWidget"], Any]) -> None:
        """Register ``callback(values, widget)`` for the Confirm button."""
        self._confirm_callbacks.append(callback)

    def on_cancel(self, callback: Callable[["PickerWidget"], Any]) -> None:
        """Register ``callback(widget)`` for the Cancel button."""
        self._cancel_callbacks.append(callback)

    def _confirm(self, _: Any) -> None:
        values = self.controller.selected_values()
        logger.debug(f"confirm {values!r}")
        for callback in list(self._confirm_callbacks):
            callback(values, self)

    def _cancel(self, _: Any) -> None:
        for callback in list(self._cancel_callbacks):
            callback(self)

    @property
    def values(self) -> List[Any]:
        return self.controller.selected_values()

    def show(self) -> None:
        """Display the picker in the current notebook output."""
        display(self)
