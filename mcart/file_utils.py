import re
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

HTML_SUFFIX = ".html"


def list_input_files(input_dir: Union[str, Path]) -> List[Path]:
    """
    Regular files in ``input_dir``, sorted by name. Subdirectories are skipped.

    Raises:
        FileNotFoundError / NotADirectoryError / PermissionError: If the directory cannot be listed.
    """
    input_dir = Path(input_dir)
    return sorted((p for p in input_dir.iterdir() if p.is_file()), key=lambda p: p.name)


def ensure_output_dir(output_dir: Union[str, Path]) -> Path:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def output_path_for(input_path: Union[str, Path], output_dir: Union[str, Path], suffix: str = HTML_SUFFIX) -> Path:
    """``photo.jpg`` -> ``<output_dir>/photo.html``"""
    return Path(output_dir) / (Path(input_path).stem + suffix)


def claim_output_path(
    input_path: Union[str, Path], output_dir: Union[str, Path], claimed: Set[Path], suffix: str = HTML_SUFFIX
) -> Path:
    """
    Output path for ``input_path`` that no earlier input of this run has claimed.

    ``a.png`` gets ``a.html``; a later ``a.jpg`` gets ``a.jpg.html``, then
    ``a.jpg-2.html`` and so on. The chosen path is added to ``claimed``.
    """
    input_path = Path(input_path)
    candidate = output_path_for(input_path, output_dir, suffix)
    if candidate in claimed:
        candidate = Path(output_dir) / (input_path.name + suffix)
        n = 2
        while candidate in claimed:
            candidate = Path(output_dir) / f"{input_path.name}-{n}{suffix}"
            n += 1
    claimed.add(candidate)
    return candidate


def clean_metadata(metadata: Optional[Dict[str, str]]) -> Dict[str, str]:
    """
    Normalise metadata keys for embedding as ``<meta name=...>`` entries.

    Whitespace becomes underscores, other characters outside [A-Za-z0-9_.-]
    are dropped and keys must start with a letter or underscore.
    """
    cleaned = {}
    for key, value in (metadata or {}).items():
        key_clean = re.sub(r'\s+', '_', key)
        key_clean = re.sub(r'[^a-zA-Z0-9_.-]', '', key_clean)
        if not re.match(r'^[a-zA-Z_]', key_clean):
            key_clean = "mcart_" + key_clean
        cleaned[key_clean[:70]] = str(value)
    return cleaned


def save_html(document: str, output_path: Union[str, Path]) -> Path:
    """
    Write an HTML document, creating parent directories as needed.

    The write is not atomic; an interrupted run can leave a partial file.
    """
    output_path = Path(output_path)
    if not output_path.parent.exists():
        output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(document, encoding="utf-8")
    return output_path
