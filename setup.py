# setup.py
from setuptools import setup, find_packages

setup(
    name="site_corpus",
    version="0.1.0",
    description="Обход сайта в headless-браузере и сборка текстового корпуса SiteCorpus",
    packages=find_packages(include=["site_corpus", "site_corpus.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.1",
        "playwright>=1.40",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "beautifulsoup4>=4.12",
        ],
    },
    entry_points={
        "console_scripts": [
            "site-corpus=site_corpus.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
