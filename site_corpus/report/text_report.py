# site_corpus/report/text_report.py
"""Сохранение корпуса как обычного текста."""
from pathlib import Path


def render_text(text: str, output_path: Path | str) -> Path:
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding='utf-8')
    return output
