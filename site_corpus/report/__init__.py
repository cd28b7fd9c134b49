"""site_corpus.report: сохранение корпуса в текстовый или JSON-файл."""
from site_corpus.report.json_report import render_json
from site_corpus.report.text_report import render_text

__all__ = ["render_json", "render_text"]
