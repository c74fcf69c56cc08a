# --- Reading the input source unit ------------------------------------------
from binder.src.binder.errors import SourceReadError


def read_text(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(f"Failed to read {path}: {e}") from e
