"""Demo page wiring every effect into a PySide shell."""
from __future__ import annotations

from PySide6 import QtCore, QtGui, QtWidgets

from sitefx.config import SiteFxSettings
from sitefx.core.app import SiteFxContext, build_context
from sitefx.core.state import Size, Theme
from sitefx.logging import get_logger
from sitefx.services.preferences import PreferenceStore
from sitefx.ui.qt_bridge import QtDocument, QtScheduler, QtViewportSource
from sitefx.ui.widgets import (
    BlurTextWidget,
    FadeInFrame,
    MagnetHost,
    SparkButton,
    ThemeToggle,
    WipeOverlay,
)

SECTIONS = ("About", "Experience", "Projects", "Skills")

LINKS = (
    ("LinkedIn", "#0077b5"),
    ("GitHub", "#8b5cf6"),
    ("Résumé", "#e11d48"),
)

PALETTES = {
    Theme.DARK.value: {
        "text": "#e5e7eb",
        "bg_color": "#0a0a0a",
        "surface": "#151515",
        "border": "rgba(255, 255, 255, 0.08)",
        "accent": "#3b82f6",
    },
    Theme.LIGHT.value: {
        "text": "#1f2937",
        "bg_color": "#fafafa",
        "surface": "#ffffff",
        "border": "rgba(0, 0, 0, 0.08)",
        "accent": "#2563eb",
    },
}


def stylesheet_for(theme: str) -> str:
    palette = PALETTES.get(theme, PALETTES[Theme.LIGHT.value])
    text = palette["text"]
    bg_color = palette["bg_color"]
    surface = palette["surface"]
    border = palette["border"]
    accent = palette["accent"]

    return f"""
        QWidget {{
            color: {text};
            font-family: 'Inter', 'Segoe UI', -apple-system, sans-serif;
            font-size: 14px;
        }}
        #Page, QScrollArea, #Content {{
            background: {bg_color};
            border: none;
        }}
        #Card {{
            background: {surface};
            border: 1px solid {border};
            border-radius: 10px;
            padding: 12px;
        }}
        #SectionTitle {{
            font-size: 20px;
            font-weight: 600;
        }}
        #LinkButton {{
            background: {surface};
            border: 1px solid {border};
            border-radius: 8px;
            padding: 8px 16px;
        }}
        #LinkButton:hover {{
            border-color: {accent};
        }}
        #ThemeSwitch {{
            background: transparent;
            border: 1px solid {border};
            border-radius: 18px;
        }}
    """


class MainWindow(QtWidgets.QWidget):
    def __init__(self, settings: SiteFxSettings, store: PreferenceStore | None = None) -> None:
        super().__init__()
        self.settings = settings
        self.logger = get_logger("ui.shell")
        self.setObjectName("Page")
        self.setWindowTitle("sitefx - interaction demo")
        self.resize(1000, 800)

        self.scheduler = QtScheduler()
        self.area = QtWidgets.QScrollArea(self)
        self.area.setWidgetResizable(True)
        self.wipe = WipeOverlay(self.scheduler, self)
        self.document = QtDocument(self, stylesheet_for)

        self.ctx: SiteFxContext = build_context(
            settings,
            self.scheduler,
            QtViewportSource(self.area),
            self.document,
            store=store,
            surface=self.wipe,
        )

        self._build_layout()
        self._wire_events()
        self.ctx.start()
        self.toggle.set_theme(self.ctx.theme.theme.value)

    def _build_layout(self) -> None:
        outer = QtWidgets.QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.setSpacing(0)

        header = QtWidgets.QHBoxLayout()
        header.setContentsMargins(16, 12, 16, 12)
        header.addStretch(1)
        self.toggle = ThemeToggle(self.ctx.events, self)
        header.addWidget(self.toggle)
        outer.addLayout(header)
        outer.addWidget(self.area, 1)

        content = QtWidgets.QWidget()
        content.setObjectName("Content")
        layout = QtWidgets.QVBoxLayout(content)
        layout.setContentsMargins(48, 48, 48, 48)
        layout.setSpacing(24)

        name = QtWidgets.QHBoxLayout()
        for word, delay in (("Jake", 0.0), ("Alessi", 0.15)):
            reveal = self.ctx.blur_text(word, delay=delay)
            widget = BlurTextWidget(reveal, self.scheduler)
            name.addWidget(widget)
            reveal.mount(widget)
        name.addStretch(1)
        layout.addLayout(name)

        links = QtWidgets.QWidget()
        links_row = QtWidgets.QHBoxLayout(links)
        links_row.setContentsMargins(0, 0, 0, 0)
        for label, color in LINKS:
            button = SparkButton(label, self.ctx.sparks(color=color), self.scheduler)
            links_row.addWidget(MagnetHost(self.ctx.magnet(), button))
        links_row.addStretch(1)
        layout.addWidget(self._fade(links, delay=0.6))

        for title in SECTIONS:
            heading = QtWidgets.QLabel(title)
            heading.setObjectName("SectionTitle")
            layout.addWidget(self._fade(heading))
            for card_index in range(3):
                card = QtWidgets.QLabel(f"{title} entry {card_index + 1}")
                card.setObjectName("Card")
                card.setMinimumHeight(120)
                layout.addWidget(self._fade(card, delay=0.05 * (card_index + 1)))
        layout.addStretch(1)

        self.area.setWidget(content)

    def _fade(self, child: QtWidgets.QWidget, delay: float = 0.0) -> FadeInFrame:
        reveal = self.ctx.fade_in(delay=delay)
        frame = FadeInFrame(reveal, self.scheduler, child)
        reveal.mount(frame)
        return frame

    def _wire_events(self) -> None:
        self.toggle.clicked.connect(self._handle_theme_toggle)
        self.ctx.events.subscribe("theme.committed", self._on_theme_committed)

    def _handle_theme_toggle(self) -> None:
        viewport = Size(self.width(), self.height())
        if not self.ctx.theme.toggle(self.toggle.anchor_rect(), viewport):
            self.logger.debug("Theme toggle ignored while a wipe is running")

    def _on_theme_committed(self, theme: Theme) -> None:
        self.toggle.set_theme(theme.value)

    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:  # noqa: N802
        if self.wipe.isVisible():
            self.wipe.setGeometry(self.rect())
        super().resizeEvent(event)

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:  # noqa: N802
        self.ctx.stop()
        self.logger.info("sitefx demo closed")
        super().closeEvent(event)


def open_window(settings: SiteFxSettings) -> MainWindow:
    window = MainWindow(settings)
    QtCore.QTimer.singleShot(0, window.ctx.viewport.refresh)
    return window
