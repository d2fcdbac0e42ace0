"""Qt renderers for the sitefx effects."""

from __future__ import annotations

from PySide6 import QtCore, QtGui, QtWidgets

from sitefx.core.events import EventBus
from sitefx.core.scheduler import Scheduler
from sitefx.core.state import Rect, TransitionOverlay
from sitefx.effects.magnet import MagnetEffect
from sitefx.effects.reveal import BlurText, FadeIn
from sitefx.effects.sparks import SparkField

FRAME_MS = 16


class _FrameClock(QtCore.QObject):
    """Repaints a widget every frame while ``active()`` holds."""

    def __init__(self, widget: QtWidgets.QWidget, active) -> None:
        super().__init__(widget)
        self._widget = widget
        self._active = active
        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(FRAME_MS)
        self._timer.timeout.connect(self._tick)

    def kick(self) -> None:
        if not self._timer.isActive():
            self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def _tick(self) -> None:
        self._widget.update()
        if not self._active():
            self._timer.stop()


class BlurTextWidget(QtWidgets.QWidget):
    """Paints each word of a ``BlurText`` at its own interpolated style."""

    def __init__(self, reveal: BlurText, scheduler: Scheduler, point_size: int = 40,
                 parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self.reveal = reveal
        self.scheduler = scheduler
        font = QtGui.QFont()
        font.setPointSize(point_size)
        font.setBold(True)
        self.setFont(font)
        self._clock = _FrameClock(self, self._animating)
        self.reveal.latch.on_visible = lambda _state: self._clock.kick()
        metrics = QtGui.QFontMetrics(font)
        self.setMinimumHeight(metrics.height() + 16)

    def _animating(self) -> bool:
        since = self.reveal.latch.state.visible_since
        if since is None:
            return False
        last = max((u.delay + u.duration for u in self.reveal.units), default=0.0)
        return (self.scheduler.now() - since) / 1000.0 <= last

    def sizeHint(self) -> QtCore.QSize:  # noqa: N802
        metrics = QtGui.QFontMetrics(self.font())
        width = sum(metrics.horizontalAdvance(w + " ") for w in self.reveal.words)
        return QtCore.QSize(width, metrics.height() + 16)

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:  # noqa: N802
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.TextAntialiasing)
        painter.setPen(self.palette().color(QtGui.QPalette.ColorRole.WindowText))
        metrics = QtGui.QFontMetrics(self.font())
        x = 0
        baseline = metrics.ascent() + 4
        for unit, style in zip(self.reveal.units, self.reveal.style_at(self.scheduler.now())):
            y = baseline + style.translate_y
            if style.blur_px > 0.5:
                # cheap blur: faint copies spread over the blur radius
                painter.setOpacity(style.opacity / 5)
                r = style.blur_px / 2
                for dx, dy in ((-r, 0), (r, 0), (0, -r), (0, r)):
                    painter.drawText(QtCore.QPointF(x + dx, y + dy), unit.content)
            painter.setOpacity(style.opacity)
            painter.drawText(QtCore.QPointF(x, y), unit.content)
            x += metrics.horizontalAdvance(unit.content + " ")
        painter.end()


class FadeInFrame(QtWidgets.QFrame):
    """Wraps one child and fades it in when its ``FadeIn`` latch fires."""

    def __init__(self, reveal: FadeIn, scheduler: Scheduler, child: QtWidgets.QWidget,
                 parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self.reveal = reveal
        self.scheduler = scheduler
        self._rise = int(reveal.hidden_style.translate_y)
        self._layout = QtWidgets.QVBoxLayout(self)
        self._layout.addWidget(child)
        self._opacity = QtWidgets.QGraphicsOpacityEffect(self)
        self.setGraphicsEffect(self._opacity)
        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(FRAME_MS)
        self._timer.timeout.connect(self._apply)
        self.reveal.latch.on_visible = lambda _state: self._timer.start()
        self._apply()

    def _apply(self) -> None:
        style = self.reveal.style_at(self.scheduler.now())[0]
        self._opacity.setOpacity(style.opacity)
        offset = round(style.translate_y)
        # keep total height constant while the content rises
        self._layout.setContentsMargins(0, offset, 0, self._rise - offset)
        if style == self.reveal.visible_style:
            self._timer.stop()


class MagnetHost(QtWidgets.QWidget):
    """Tracks the pointer over its own rect and slides the child by the magnet offset."""

    def __init__(self, magnet: MagnetEffect, child: QtWidgets.QWidget,
                 parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self.magnet = magnet
        self.child = child
        child.setParent(self)
        child.installEventFilter(self)
        self.setMouseTracking(True)
        child.setMouseTracking(True)
        self._margin = 12
        self._anim = QtCore.QPropertyAnimation(child, b"pos", self)
        self._anim.setEasingCurve(QtCore.QEasingCurve.Type.OutQuad)
        hint = child.sizeHint()
        self.setFixedSize(hint.width() + 2 * self._margin, hint.height() + 2 * self._margin)
        child.resize(hint)
        child.move(self._rest)
        self.magnet.bind(Rect(0, 0, self.width(), self.height()))

    @property
    def _rest(self) -> QtCore.QPoint:
        return QtCore.QPoint(self._margin, self._margin)

    def _slide(self) -> None:
        offset = self.magnet.offset
        self._anim.stop()
        self._anim.setDuration(int(self.magnet.transition_s * 1000))
        self._anim.setStartValue(self.child.pos())
        self._anim.setEndValue(self._rest + QtCore.QPoint(round(offset.x), round(offset.y)))
        self._anim.start()

    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:  # noqa: N802
        self.magnet.bind(Rect(0, 0, self.width(), self.height()))
        super().resizeEvent(event)

    def eventFilter(self, obj: QtCore.QObject, event: QtCore.QEvent) -> bool:  # noqa: N802
        if obj is self.child and event.type() == QtCore.QEvent.Type.MouseMove:
            pos = self.child.mapTo(self, event.position().toPoint())
            if self.magnet.on_pointer_move(pos.x(), pos.y()) is not None:
                self._slide()
        return False

    def mouseMoveEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: N802
        pos = event.position()
        if self.magnet.on_pointer_move(pos.x(), pos.y()) is not None:
            self._slide()
        super().mouseMoveEvent(event)

    def leaveEvent(self, event: QtCore.QEvent) -> None:  # noqa: N802
        self.magnet.on_pointer_leave()
        self._slide()
        super().leaveEvent(event)


class SparkButton(QtWidgets.QPushButton):
    """Push button that bursts sparks from each click point."""

    def __init__(self, text: str, sparks: SparkField, scheduler: Scheduler,
                 parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(text, parent)
        self.sparks = sparks
        self.scheduler = scheduler
        self.setObjectName("LinkButton")
        self._clock = _FrameClock(self, lambda: bool(self.sparks.particles))

    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: N802
        pos = event.position()
        self.sparks.spawn(pos.x(), pos.y())
        self._clock.kick()
        super().mousePressEvent(event)

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:  # noqa: N802
        super().paintEvent(event)
        particles = self.sparks.particles
        if not particles:
            return
        now = self.scheduler.now()
        size = self.sparks.settings.size_px
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)
        painter.setPen(QtCore.Qt.PenStyle.NoPen)
        painter.setBrush(QtGui.QColor(self.sparks.color))
        for particle in particles:
            x, y = particle.position_at(now)
            r = size * particle.scale_at(now) / 2
            painter.setOpacity(particle.opacity_at(now))
            painter.drawEllipse(QtCore.QPointF(x, y), r, r)
        painter.end()


class ThemeToggle(QtWidgets.QPushButton):
    """Chain-pull toggle; dips while the pull sub-state is active."""

    def __init__(self, events: EventBus, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__("☀", parent)
        self.setObjectName("ThemeSwitch")
        self.setFixedSize(36, 36)
        self.setToolTip("Toggle theme")
        events.subscribe("theme.pull.started", lambda _p: self._set_pulled(True))
        events.subscribe("theme.pull.ended", lambda _p: self._set_pulled(False))

    def set_theme(self, theme: str) -> None:
        self.setText("🌙" if theme == "dark" else "☀")

    def _set_pulled(self, pulled: bool) -> None:
        self.setContentsMargins(0, 6 if pulled else 0, 0, 0)
        self.setDown(pulled)

    def anchor_rect(self) -> Rect:
        top_left = self.mapTo(self.window(), QtCore.QPoint(0, 0))
        return Rect(top_left.x(), top_left.y(), self.width(), self.height())


class WipeOverlay(QtWidgets.QWidget):
    """Full-window radial wipe; implements the controller's overlay surface."""

    def __init__(self, scheduler: Scheduler, parent: QtWidgets.QWidget) -> None:
        super().__init__(parent)
        self.scheduler = scheduler
        self.overlay: TransitionOverlay | None = None
        self.setAttribute(QtCore.Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self._clock = _FrameClock(self, lambda: self.overlay is not None)
        self.hide()

    def show(self, overlay: TransitionOverlay | None = None) -> None:  # type: ignore[override]
        if overlay is not None:
            self.overlay = overlay
            self.setGeometry(self.parentWidget().rect())
            self.raise_()
            self._clock.kick()
        super().show()

    def release(self, overlay: TransitionOverlay) -> None:
        if self.overlay is overlay:
            self.overlay = None
            self._clock.stop()
            self.hide()

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:  # noqa: N802
        if self.overlay is None:
            return
        radius = self.overlay.radius_at(self.scheduler.now())
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)
        painter.setPen(QtCore.Qt.PenStyle.NoPen)
        painter.setBrush(QtGui.QColor(self.overlay.target_color))
        painter.drawEllipse(QtCore.QPointF(self.overlay.center_x, self.overlay.center_y), radius, radius)
        painter.end()
