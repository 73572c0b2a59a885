"""Main window for PortWatch."""

from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QLabel,
    QTableView,
    QHeaderView,
)
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent
from portwatch.monitor import PortMonitor
from portwatch.ui.host_model import HostTableModel


class MainWindow(QMainWindow):
    """Dashboard showing one row per monitored host."""

    def __init__(self, monitor: PortMonitor, refresh_ms: int = 1000):
        super().__init__()
        self.setWindowTitle("PortWatch")
        self.setGeometry(100, 100, 900, 500)

        self.monitor = monitor
        self.host_model = HostTableModel(monitor.store)

        # The store is polled, not pushed
        self.refresh_timer = QTimer()
        self.refresh_timer.timeout.connect(self.refresh)
        self.refresh_timer.start(refresh_ms)

        self.setup_ui()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Stop refreshing and drain the probers before closing."""
        self.refresh_timer.stop()
        self.monitor.stop_monitoring()
        super().closeEvent(event)

    def setup_ui(self):
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)

        started = self.host_model.session_start.strftime("%Y-%m-%d %H:%M:%S")
        self.session_label = QLabel(
            f"Monitoring port {self.host_model.port} since {started}"
        )
        self.session_label.setAlignment(Qt.AlignCenter)
        self.session_label.setStyleSheet("font-weight: bold; font-size: 14px; margin: 10px;")
        layout.addWidget(self.session_label)

        self.table = QTableView()
        self.table.setModel(self.host_model)
        self.table.setAlternatingRowColors(True)
        self.table.setSelectionBehavior(QTableView.SelectRows)
        self.table.verticalHeader().setVisible(False)

        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeToContents)
        header.setStretchLastSection(True)

        layout.addWidget(self.table)

        self.status_label = QLabel("Status: Monitoring")
        self.status_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.status_label)

    def refresh(self):
        """Re-read the snapshot store."""
        self.host_model.refresh()
