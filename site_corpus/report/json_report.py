# site_corpus/report/json_report.py

"""
Генерация JSON-отчёта для проекта SiteCorpus.

Сохраняет URL обхода и собранный текст в файл.
"""
import json
from pathlib import Path


def render_json(url: str, text: str, output_path: Path | str, *, pretty: bool = False) -> Path:
    """
    Сохраняет результат обхода в формате JSON по указанному пути.

    :param url: исходный URL обхода
    :param text: агрегированный текст
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 вместо компактного вывода
    :return: Path сохранённого файла

    Пример:
    ```python
    from site_corpus.report.json_report import render_json
    report_path = render_json("https://example.com", text, 'reports/corpus.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = {
        'url': url,
        'text': text,
        'length': len(text),
    }

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2 if pretty else None)

    return output
