# widgets/ViewBox.py

import pyqtgraph as pg
from PyQt5 import QtCore

class ViewBox(pg.ViewBox):
    """
    Charts are static by default. With interactive=True, zoom and pan
    only respond while Ctrl is held.
    """

    def __init__(self, *args, interactive=False, **kwargs):
        super().__init__(*args, enableMouse=interactive, **kwargs)
        self.interactive = interactive
        self.setMenuEnabled(interactive)

    def wheelEvent(self, ev, axis=None):
        if self.interactive and ev.modifiers() & QtCore.Qt.ControlModifier:
            super().wheelEvent(ev, axis)
        else:
            ev.ignore()

    def mouseDragEvent(self, ev, axis=None):
        if self.interactive and ev.modifiers() & QtCore.Qt.ControlModifier:
            super().mouseDragEvent(ev, axis)
        else:
            ev.ignore()
