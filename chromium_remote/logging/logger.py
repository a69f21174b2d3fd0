from threading import Lock
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, DownloadColumn, TransferSpeedColumn
from rich.theme import Theme
from datetime import datetime

custom_theme = Theme({
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
    "progress": "blue",
    "time": "cyan"
})

class ChromiumLogger:
    _instance = None
    _progress = None
    _tasks = {}
    _lock = Lock()

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._setup()
        return cls._instance

    def _setup(self):
        self.verbose = False
        self.console = Console(theme=custom_theme, stderr=True)
        if self._progress is None:
            self._progress = Progress(
                SpinnerColumn(),
                TextColumn("[progress]{task.description}"),
                BarColumn(),
                DownloadColumn(binary_units=True),
                TransferSpeedColumn(),
                console=self.console
            )

    def set_verbose(self, verbose: bool):
        self.verbose = verbose

    def _format_message(self, message: str):
        timestamp = datetime.now().strftime("%H:%M:%S")
        return f"[time]{timestamp}[/time] {message}"

    def info(self, message: str):
        if self.verbose:
            self.console.print(self._format_message(f"ℹ️ {message}"), style="info", highlight=False)

    def warning(self, message: str):
        self.console.print(self._format_message(f"⚠️  {message}"), style="warning", highlight=False)

    def error(self, message: str):
        self.console.print(self._format_message(f"❌ {message}"), style="error", highlight=False)

    def success(self, message: str):
        self.console.print(self._format_message(f"✅ {message}"), style="success", highlight=False)

    def status(self, message: str):
        self.console.print(self._format_message(f"👉 {message}"), style="progress", highlight=False)

    def start_progress(self, key: str, description: str, total=None) -> None:
        """Start a byte-count progress bar identified by *key*. ``total=None`` renders a pulsing bar."""
        with self._lock:
            if key in self._tasks:
                return
            if not self._progress.live.is_started:
                self._progress.start()
            self._tasks[key] = self._progress.add_task(description, total=total)

    def is_progress_active(self, key: str) -> bool:
        with self._lock:
            return key in self._tasks

    def update_progress(self, key: str, completed: int) -> None:
        with self._lock:
            task_id = self._tasks.get(key)
            if task_id is None:
                return
            self._progress.update(task_id, completed=completed)
            self._progress.refresh()

    def complete_progress(self, key: str) -> None:
        with self._lock:
            task_id = self._tasks.pop(key, None)
            if task_id is None:
                self.warning(f"No active progress task for '{key}' to complete.")
                return
            self._progress.remove_task(task_id)
            if not self._tasks and self._progress.live.is_started:
                self._progress.stop()

    def truncate_url(self, url: str, max_length: int = 70) -> str:
        if len(url) <= max_length:
            return url
        return url[:max_length//2] + "..." + url[-max_length//2:]

logger = ChromiumLogger()
