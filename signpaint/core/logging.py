"""
Signpaint Logging - File and console logging for editor debugging
"""
from datetime import datetime
from pathlib import Path

_log_file = None  # open debug file, None until init_logging()
_log_enabled = True


def init_logging(log_dir: str = None):
    """Initialize file logging for the editor"""
    global _log_file

    if log_dir is None:
        # Default to the directory holding the signpaint package
        log_dir = Path(__file__).parent.parent.parent

    log_path = Path(log_dir) / "signpaint_debug.log"

    close_logging()
    try:
        _log_file = open(log_path, 'w', encoding='utf-8')
        _log_file.write(f"=== Signpaint Debug Log - {datetime.now().isoformat()} ===\n\n")
        _log_file.flush()
        print(f"[Signpaint] Logging to: {log_path}")
    except OSError as e:
        print(f"[Signpaint] Warning: Could not create log file: {e}")
        _log_file = None


def log(message: str, prefix: str = "[Signpaint]"):
    """Log a message to both console and file"""
    line = f"{prefix} {message}"
    print(line)

    if _log_file and _log_enabled:
        try:
            _log_file.write(line + "\n")
            _log_file.flush()
        except (OSError, ValueError):
            pass


def log_controller(message: str):
    """Log a ToolController message"""
    log(message, "[ToolController]")


def log_stack(message: str):
    """Log a LayerStack message"""
    log(message, "[LayerStack]")


def log_codec(message: str):
    """Log a GlyphCodec message"""
    log(message, "[GlyphCodec]")


def close_logging():
    """Close the log file"""
    global _log_file
    if _log_file:
        try:
            _log_file.close()
        except OSError:
            pass
        _log_file = None


def set_logging_enabled(enabled: bool):
    """Enable or disable file logging"""
    global _log_enabled
    _log_enabled = enabled
