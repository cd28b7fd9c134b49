"""site_corpus.crawler: обход сайта в headless-браузере."""
