"""Qt table model over the live host snapshots."""

from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QColor
from portwatch.models import HostStatus
from portwatch.store import SnapshotStore


class HostTableModel(QAbstractTableModel):
    """Table model with one row per monitored host.

    Reads are pull-based: refresh() takes the store's current snapshot and
    notifies views. Rows are fixed for the session, in configured order.
    """

    def __init__(self, store: SnapshotStore, parent=None):
        super().__init__(parent)
        self._store = store
        self._snapshot = store.snapshot()
        self._hostnames = list(self._snapshot.hosts)

        self._columns = [
            "Host",
            "Status",
            "Last Seen",
            "Session Avg (ms)",
            "5 min Avg (ms)",
            "5 min Failures",
        ]

        self._never = "--"
        self._status_colors = {
            HostStatus.ONLINE: QColor("#2e7d32"),
            HostStatus.UNSTABLE: QColor("#ef6c00"),
            HostStatus.OFFLINE: QColor("#c62828"),
        }

    def rowCount(self, parent=QModelIndex()):
        if parent.isValid():
            return 0
        return len(self._hostnames)

    def columnCount(self, parent=QModelIndex()):
        if parent.isValid():
            return 0
        return len(self._columns)

    def data(self, index, role=Qt.DisplayRole):
        """Return data for a given cell."""
        if not index.isValid():
            return None

        if index.row() >= len(self._hostnames) or index.row() < 0:
            return None

        host = self._snapshot.hosts[self._hostnames[index.row()]]
        col = index.column()

        if role == Qt.DisplayRole:
            if col == 0:
                return host.hostname
            elif col == 1:
                return host.status.value
            elif col == 2:
                if host.last_seen is None:
                    return self._never
                return host.last_seen.strftime("%Y-%m-%d %H:%M:%S")
            elif col == 3:
                return str(host.session_average_latency)
            elif col == 4:
                return str(host.five_minute_average_latency)
            elif col == 5:
                return str(host.five_minute_failures)

        elif role == Qt.ForegroundRole:
            if col == 1:
                return self._status_colors.get(host.status)

        elif role == Qt.TextAlignmentRole:
            if col >= 3:  # numeric columns
                return Qt.AlignRight | Qt.AlignVCenter
            return Qt.AlignLeft | Qt.AlignVCenter

        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role == Qt.DisplayRole and orientation == Qt.Horizontal:
            if 0 <= section < len(self._columns):
                return self._columns[section]
        return None

    def flags(self, index):
        """Return item flags (read-only)."""
        if not index.isValid():
            return Qt.NoItemFlags
        return Qt.ItemIsEnabled | Qt.ItemIsSelectable

    def refresh(self):
        """Pull the latest snapshot from the store and repaint all cells."""
        self._snapshot = self._store.snapshot()
        if not self._hostnames:
            return
        top_left = self.index(0, 0)
        bottom_right = self.index(len(self._hostnames) - 1, len(self._columns) - 1)
        self.dataChanged.emit(top_left, bottom_right)

    @property
    def session_start(self):
        return self._snapshot.session_start

    @property
    def port(self):
        return self._snapshot.port
