# widgets/GraphWidget.py

from PyQt5 import QtWidgets, QtCore, QtGui
from typing import Any, Optional, Tuple
from PyQt5.QtWidgets import QToolBar, QAction, QMenu, QToolButton, QShortcut
from PyQt5.QtCore import QRect
from PyQt5.QtGui import QKeySequence

RESIZE_DEBOUNCE_MS = 200
TOOLBAR_HEIGHT = 24

class GraphWidget(QtWidgets.QWidget):
    _name_counter = 1

    def __init__(
        self,
        name: Optional[str] = None,
        *args: Any,
        resize_debounce_ms: int = RESIZE_DEBOUNCE_MS,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)

        if name is None:
            name = f"Chart#{GraphWidget._name_counter}"
            GraphWidget._name_counter += 1
        self.graph_name = name
        self.setWindowTitle(self.graph_name)

        # Size as last committed by the debounce timer, None until the first commit
        self.committed_size: Optional[Tuple[int, int]] = None
        self._pending_size: Optional[Tuple[int, int]] = None
        self._resize_timer = QtCore.QTimer(self)
        self._resize_timer.setSingleShot(True)
        self._resize_timer.setInterval(resize_debounce_ms)
        self._resize_timer.timeout.connect(self._commit_size)

        self.toolbar = QToolBar("Graph Toolbar", self)
        self.toolbar.setMovable(False)
        self.toolbar.setFloatable(False)
        self.toolbar.setFixedHeight(TOOLBAR_HEIGHT)

        self._create_actions()

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.toolbar)

        self.content_widget = QtWidgets.QWidget(self)
        self.content_layout = QtWidgets.QVBoxLayout(self.content_widget)
        self.content_layout.setContentsMargins(0, 0, 0, 0)
        self.content_widget.setLayout(self.content_layout)

        layout.addWidget(self.content_widget)
        self.setLayout(layout)

        self._create_shortcuts()

        self.extend_toolbar(self.toolbar)

    def _create_actions(self) -> None:
        window_menu = QMenu("Window", self)
        window_menu.addAction("Maximize", self.showMaximized)
        window_menu.addAction("Minimize", self.showMinimized)
        window_menu.addAction("Restore", self.showNormal)
        window_menu.addAction("Screenshot", self.take_screenshot)

        export_action = QAction("Export SVG…", self)
        export_action.triggered.connect(self._export_svg_dialog)
        window_menu.addAction(export_action)

        stay_on_top_action = QAction("Stay on top", self, checkable=True)
        def toggle_stay(checked):
            self.setWindowFlag(QtCore.Qt.WindowStaysOnTopHint, checked)
            self.show()
        stay_on_top_action.toggled.connect(toggle_stay)
        window_menu.addAction(stay_on_top_action)

        window_menu.addAction("Close", self.close)

        window_button = QToolButton(self)
        window_button.setText("Window")
        window_button.setMenu(window_menu)
        window_button.setPopupMode(QToolButton.InstantPopup)
        self.toolbar.addWidget(window_button)

    def extend_toolbar(self, toolbar: QtWidgets.QToolBar) -> None:
        view_menu = QtWidgets.QMenu("View", self)

        axis_menu = QtWidgets.QMenu("Axis", self)

        self._axis_labels_visible = True
        toggle_axis_labels_action = QtWidgets.QAction("Show Axis Labels", self, checkable=True)
        toggle_axis_labels_action.setChecked(self._axis_labels_visible)

        def on_toggle_axis_labels():
            self._axis_labels_visible = toggle_axis_labels_action.isChecked()
            if hasattr(self, "update_axis_labels"):
                self.update_axis_labels()

        toggle_axis_labels_action.triggered.connect(on_toggle_axis_labels)
        axis_menu.addAction(toggle_axis_labels_action)

        view_menu.addMenu(axis_menu)

        fit_action = QtWidgets.QAction("Fit to Data", self)
        def fit():
            if hasattr(self, "fit_view"):
                self.fit_view()
        fit_action.triggered.connect(fit)
        view_menu.addAction(fit_action)

        view_button = QtWidgets.QToolButton(self)
        view_button.setText("View")
        view_button.setMenu(view_menu)
        view_button.setPopupMode(QtWidgets.QToolButton.InstantPopup)
        toolbar.addWidget(view_button)

    def _create_shortcuts(self) -> None:
        def bind(seq, func):
            QShortcut(QKeySequence(seq), self).activated.connect(func)

        bind("Ctrl+Shift+M", self.showMaximized)
        bind("Ctrl+Shift+N", self.showMinimized)
        bind("Ctrl+Shift+R", self.showNormal)
        bind("Ctrl+Shift+S", self.take_screenshot)
        bind("Ctrl+T", self._toggle_stay_on_top)
        bind("Ctrl+Q", self.close)

    def _toggle_stay_on_top(self) -> None:
        self.setWindowFlag(QtCore.Qt.WindowStaysOnTopHint, not self.windowFlags() & QtCore.Qt.WindowStaysOnTopHint)
        self.show()

    def take_screenshot(self, filename: Optional[str] = None) -> str:
        pixmap = self.grab(QRect(0, 0, self.width(), self.height()))
        if filename is None:
            filename = f"screenshot_{self.graph_name.replace(' ', '_')}_{id(self)}.png"
        pixmap.save(filename)
        print(f"[GraphWidget] Saved screenshot to {filename}")
        return filename

    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:
        """
        Every resize restarts the debounce timer; the size is only
        committed (and charts redrawn) once resizing has paused for
        resize_debounce_ms.
        """
        super().resizeEvent(event)
        size = event.size()
        self._pending_size = (size.width(), size.height())
        self._resize_timer.start()

    def _commit_size(self) -> None:
        size = self._pending_size
        if size is None or size == self.committed_size:
            return
        self.committed_size = size
        self.on_size_committed(size)

    def flush_resize(self) -> None:
        if self._resize_timer.isActive():
            self._resize_timer.stop()
            self._commit_size()

    def resize_content(self, width: int, height: int) -> None:
        # the toolbar sits above the content area
        self.resize(width, height + TOOLBAR_HEIGHT)

    def on_size_committed(self, size: Tuple[int, int]) -> None:
        pass

    def _export_svg_dialog(self) -> None:
        if not hasattr(self, "export_svg"):
            return
        default = f"{self.graph_name.replace(' ', '_')}.svg"
        path, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Export SVG", default, "SVG Files (*.svg)")
        if not path:
            return
        try:
            self.export_svg(path)
        except Exception as e:
            QtWidgets.QMessageBox.critical(self, "Export failed", str(e))

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        self._resize_timer.stop()
        super().closeEvent(event)
