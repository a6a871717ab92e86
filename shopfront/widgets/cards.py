from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout, QWidget


def _label(text: str, name: str) -> QLabel:
    label = QLabel(text)
    label.setObjectName(name)
    return label


class StatCard(QFrame):
    """Headline number with a title above and a small caption below (styled in style.qss)."""

    def __init__(self, title: str, caption: str = "", parent=None):
        super().__init__(parent)
        self.setObjectName("statCard")
        self.title = _label(title, "statTitle")
        self.figure = _label("-", "statValue")
        self.caption = _label(caption, "statCaption")
        self.caption.setWordWrap(True)
        box = QVBoxLayout(self)
        box.setContentsMargins(12, 10, 12, 12)
        for label in (self.title, self.figure, self.caption):
            box.addWidget(label)

    def value(self) -> str:
        return self.figure.text()

    def update_figure(self, text: str, caption: str | None = None) -> None:
        self.figure.setText(text)
        if caption is not None:
            self.caption.setText(caption)


class Panel(QFrame):
    """Bordered box with a bold heading over one body widget."""

    def __init__(self, heading: str, body: QWidget, parent=None):
        super().__init__(parent)
        self.setObjectName("panel")
        box = QVBoxLayout(self)
        box.setContentsMargins(12, 10, 12, 12)
        box.setSpacing(6)
        box.addWidget(_label(heading, "panelHeading"))
        box.addWidget(body, 1)
