"""Qt adapter for the engine ConfigStore.

A settings dialog edits a snapshot of the live settings and hands it back when
the user confirms. Loading and saving touch the disk several times per call, so
they run on a worker thread instead of the UI thread.

Threading model
--------------
- A single worker QObject lives on a dedicated QThread.
- The worker owns the ConfigStore; no other thread touches it.
- The GUI communicates with the worker via queued Qt signals and only ever
  receives deep copies of the settings.
"""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QObject, Qt, QThread, Signal, Slot

from config_engine.errors import ConfigEngineError
from config_engine.languages import Language
from config_engine.settings import Settings
from config_engine.store import ConfigStore, StoreOptions


class ConfigStoreWorker(QObject):
    """Worker that owns the engine ConfigStore and runs in a background thread."""

    loaded = Signal(object)  # Settings snapshot
    saved = Signal()
    imported = Signal(str)  # profile name, "" if the file named none
    exported = Signal(str)  # target path
    error = Signal(str)  # message

    def __init__(
        self,
        config_path: Path,
        language: Language | None = None,
        options: StoreOptions | None = None,
    ) -> None:
        super().__init__()
        self._store = ConfigStore(config_path, language, options=options)

    @Slot(object)
    def load(self, profile: object) -> None:
        """Load `profile` (None: the stored current profile) and emit a snapshot."""
        try:
            self._store.load(profile if isinstance(profile, str) else None)
        except (ConfigEngineError, OSError) as e:
            self.error.emit(str(e))
            return
        self.loaded.emit(self._store.snapshot())

    @Slot(object)
    def apply(self, settings: object) -> None:
        """Replace the live settings with an edited snapshot and save."""
        try:
            assert isinstance(settings, Settings)
            self._store.restore(settings)
            self._store.save()
        except (ConfigEngineError, OSError) as e:
            self.error.emit(str(e))
            return
        self.saved.emit()

    @Slot(str)
    def import_profile(self, path: str) -> None:
        """Import a profile file, save, and emit the imported profile name."""
        try:
            imported = self._store.import_profile(Path(path))
            if imported:
                self._store.save()
        except (ConfigEngineError, OSError) as e:
            self.error.emit(str(e))
            return
        self.imported.emit(self._store.current_profile if imported else "")
        if imported:
            self.loaded.emit(self._store.snapshot())

    @Slot(str, str)
    def export_profile(self, profile: str, path: str) -> None:
        """Export the live settings under `profile` to `path`."""
        try:
            self._store.export_profile(profile, Path(path))
        except (ConfigEngineError, OSError) as e:
            self.error.emit(str(e))
            return
        self.exported.emit(path)


class ConfigStoreAdapter(QObject):
    """Qt adapter that marshals ConfigStore calls onto a worker thread."""

    # Requests (GUI emits these; wired as queued connections to worker slots)
    request_load = Signal(object)
    request_apply = Signal(object)
    request_import = Signal(str)
    request_export = Signal(str, str)

    # Results (worker emits; adapter forwards)
    loaded = Signal(object)  # Settings snapshot
    saved = Signal()
    imported = Signal(str)  # profile name
    exported = Signal(str)  # target path
    error = Signal(str)  # message

    def __init__(
        self,
        config_path: Path,
        language: Language | None = None,
        options: StoreOptions | None = None,
    ) -> None:
        super().__init__()

        self._thread = QThread()
        self._worker = ConfigStoreWorker(config_path=config_path, language=language, options=options)
        self._worker.moveToThread(self._thread)

        # Queue requests onto worker thread.
        self.request_load.connect(self._worker.load, type=Qt.ConnectionType.QueuedConnection)
        self.request_apply.connect(self._worker.apply, type=Qt.ConnectionType.QueuedConnection)
        self.request_import.connect(
            self._worker.import_profile, type=Qt.ConnectionType.QueuedConnection
        )
        self.request_export.connect(
            self._worker.export_profile, type=Qt.ConnectionType.QueuedConnection
        )

        # Forward results to GUI.
        self._worker.loaded.connect(self.loaded)
        self._worker.saved.connect(self.saved)
        self._worker.imported.connect(self.imported)
        self._worker.exported.connect(self.exported)
        self._worker.error.connect(self.error)

        self._thread.start()

    def shutdown(self) -> None:
        """Stop the worker thread cleanly."""
        self._thread.quit()
        self._thread.wait()
