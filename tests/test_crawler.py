# Test-suite for the SiteCorpus crawl driver (stub browser, no real Chromium)
from __future__ import annotations

import asyncio
import logging

import pytest
from conftest import SEED, StubBrowser, make_factory, page
from site_corpus.config import CrawlerConfig
from site_corpus.crawler.crawler import SiteCrawler, crawl_site
from site_corpus.crawler.models import BrowserSessionError, CrawlSession, InvalidSeedURL, PageLoadError
from site_corpus.logger import get_logger


async def run_crawler(config: CrawlerConfig, browser: StubBrowser, seed: str = SEED):
    async with SiteCrawler(config, make_factory(browser)) as crawler:
        text = await asyncio.wait_for(crawler.crawl(seed), timeout=10)
    return crawler, text


# --------------------------------------------------------------------------- #
#                                  Scenarios                                  #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_single_page_without_links(fast_config):
    browser = StubBrowser({SEED: page("Home", "<p>Hello world</p>")})
    crawler, text = await run_crawler(fast_config, browser)

    assert browser.navigations == [SEED]
    assert crawler.state.visited == {SEED}
    assert crawler.state.page_count == 1
    assert len(crawler.state.frontier) == 0
    assert text.count("PAGE: ") == 1
    assert "PAGE: Home\nURL: https://example.com\n" in text
    assert "Hello world" in text
    assert browser.closed


@pytest.mark.asyncio()
async def test_unparseable_seed_fails_before_browser_launch(fast_config):
    browser = StubBrowser({})
    launches = []
    with pytest.raises(InvalidSeedURL):
        await crawl_site("not a url", fast_config, make_factory(browser, launches))
    assert launches == []
    assert browser.navigations == []


@pytest.mark.asyncio()
@pytest.mark.parametrize(
    "failure",
    [asyncio.TimeoutError(), PageLoadError(f"{SEED}/slow", "Timeout 10000ms exceeded")],
)
async def test_navigation_timeout_does_not_abort_crawl(fast_config, failure):
    browser = StubBrowser(
        {
            SEED: page("Home", '<a href="/slow">Slow</a><a href="/next">Next</a>'),
            f"{SEED}/slow": failure,
            f"{SEED}/next": page("Next", "<p>next page</p>"),
        }
    )
    crawler, text = await run_crawler(fast_config, browser)

    assert crawler.state.visited == {SEED, f"{SEED}/slow", f"{SEED}/next"}
    assert "PAGE: Page Not Loaded\nURL: https://example.com/slow\n" in text
    assert "next page" in text


@pytest.mark.asyncio()
async def test_same_href_from_two_elements_fetched_once(fast_config):
    body = (
        '<nav><a href="/about">About</a></nav>'
        "<p>intro</p>"
        '<footer><a href="/about#team">About   us</a></footer>'
    )
    browser = StubBrowser(
        {
            SEED: page("Home", body),
            f"{SEED}/about": page("About", "<p>about page</p>"),
        }
    )
    _, text = await run_crawler(fast_config, browser)

    assert browser.navigations.count(f"{SEED}/about") == 1
    assert "- [Link] About: https://example.com/about\n" in text
    assert "- [Link] About us: https://example.com/about\n" in text


# --------------------------------------------------------------------------- #
#                                 Invariants                                  #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_cross_domain_links_are_not_followed(fast_config):
    body = (
        '<a href="https://other.com/page">Other</a>'
        '<a href="https://blog.example.com/post">Blog</a>'
        '<a href="/local">Local</a>'
    )
    browser = StubBrowser(
        {
            SEED: page("Home", body),
            f"{SEED}/local": page("Local", "<p>local</p>"),
        }
    )
    crawler, text = await run_crawler(fast_config, browser)

    assert browser.navigations == [SEED, f"{SEED}/local"]
    assert all(url.startswith(SEED) for url in crawler.state.visited)
    # listed but not followed
    assert "- [Link] Other: https://other.com/page" in text


@pytest.mark.asyncio()
async def test_max_pages_caps_the_crawl():
    config = CrawlerConfig(settle_delay=0, hover_settle_delay=0, max_pages=3)
    links = "".join(f'<a href="/page{i}">Page {i}</a>' for i in range(1, 6))
    pages = {SEED: page("Home", links)}
    pages.update({f"{SEED}/page{i}": page(f"P{i}", "<p>x</p>") for i in range(1, 6)})
    browser = StubBrowser(pages)
    crawler, text = await run_crawler(config, browser)

    assert len(browser.navigations) == 3
    assert len(crawler.state.visited) == 3
    assert crawler.state.page_count == config.max_pages
    assert text.count("PAGE: ") == 3


@pytest.mark.asyncio()
async def test_priority_pages_are_visited_first(fast_config):
    body = (
        '<a href="/zeta">Zeta</a>'
        '<a href="/blog">Blog</a>'
        '<a href="/About-Us">About</a>'
        '<a href="/careers">Careers</a>'
    )
    pages = {SEED: page("Home", body)}
    for path in ("zeta", "blog", "About-Us", "careers"):
        pages[f"{SEED}/{path}"] = page(path, "<p>x</p>")
    browser = StubBrowser(pages)
    await run_crawler(fast_config, browser)

    assert browser.navigations[0] == SEED
    assert set(browser.navigations[1:3]) == {f"{SEED}/About-Us", f"{SEED}/careers"}
    assert set(browser.navigations[3:]) == {f"{SEED}/zeta", f"{SEED}/blog"}


@pytest.mark.asyncio()
async def test_filtered_links_never_listed_or_followed(fast_config):
    body = (
        '<a href="javascript:void(0)">Menu</a>'
        '<a href="mailto:info@example.com">Mail</a>'
        '<a href="tel:+123">Call</a>'
        '<a href="#top">Top</a>'
        '<a href="/">Home</a>'
        f'<a href="{SEED}/">Home again</a>'
        '<a href="/empty"> </a>'
    )
    browser = StubBrowser({SEED: page("Home", body)})
    _, text = await run_crawler(fast_config, browser)

    assert browser.navigations == [SEED]
    assert "[Link]" not in text


@pytest.mark.asyncio()
async def test_output_is_truncated_prefix():
    body = "<p>" + "lorem ipsum " * 50 + "</p>" + '<a href="/more">More</a>'
    pages = {SEED: page("Home", body), f"{SEED}/more": page("More", "<p>" + "dolor " * 50 + "</p>")}

    _, full = await run_crawler(CrawlerConfig(settle_delay=0, hover_settle_delay=0), StubBrowser(pages))
    limited_cfg = CrawlerConfig(settle_delay=0, hover_settle_delay=0, max_chars=120)
    _, limited = await run_crawler(limited_cfg, StubBrowser(pages))

    assert len(full) > 120
    assert len(limited) == 120
    assert limited == full[:120]


# --------------------------------------------------------------------------- #
#                           Best-effort and failures                          #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_hover_failure_is_ignored(fast_config):
    browser = StubBrowser(
        {SEED: page("Home", '<nav><a href="/team">Team</a></nav>'), f"{SEED}/team": page("Team", "<p>t</p>")},
        fail_hover=True,
    )
    _, text = await run_crawler(fast_config, browser)

    assert browser.hover_calls == 2
    assert "PAGE: Team" in text


@pytest.mark.asyncio()
async def test_missing_body_degrades_to_placeholder(fast_config):
    browser = StubBrowser({SEED: "<html><head><title>Loading</title></head></html>"})
    _, text = await run_crawler(fast_config, browser)

    assert "PAGE: Page Not Loaded" in text
    assert "CONTENT:\n\n" in text


@pytest.mark.asyncio()
async def test_untitled_page(fast_config):
    browser = StubBrowser({SEED: "<html><body><p>no title</p></body></html>"})
    _, text = await run_crawler(fast_config, browser)
    assert "PAGE: Untitled Page" in text


@pytest.mark.asyncio()
async def test_render_exception_skips_only_that_page(fast_config):
    browser = StubBrowser(
        {
            SEED: page("Home", '<a href="/bad">Bad</a><a href="/good">Good</a>'),
            f"{SEED}/bad": RuntimeError("render exception"),
            f"{SEED}/good": page("Good", "<p>good page</p>"),
        }
    )
    crawler, text = await run_crawler(fast_config, browser)

    assert browser.navigations == [SEED, f"{SEED}/bad", f"{SEED}/good"]
    assert f"{SEED}/bad" in crawler.state.visited
    assert "PAGE: Page Not Loaded\nURL: https://example.com/bad\n" in text
    assert "good page" in text
    assert browser.closed


@pytest.mark.asyncio()
async def test_session_closed_on_unexpected_error(fast_config, monkeypatch):
    def broken_enqueue(self, links):
        raise RuntimeError("frontier corrupted")

    monkeypatch.setattr(CrawlSession, "enqueue_links", broken_enqueue)
    browser = StubBrowser({SEED: page("Home", "<p>x</p>")})
    with pytest.raises(RuntimeError, match="frontier corrupted"):
        await crawl_site(SEED, fast_config, make_factory(browser))
    assert browser.closed


@pytest.mark.asyncio()
async def test_launch_failure_is_session_error(fast_config):
    async def broken_factory(_config):
        raise OSError("chromium not installed")

    with pytest.raises(BrowserSessionError):
        await crawl_site(SEED, fast_config, broken_factory)


@pytest.mark.asyncio()
async def test_close_failure_is_session_error(fast_config):
    browser = StubBrowser({SEED: page("Home", "<p>x</p>")}, fail_close=True)
    with pytest.raises(BrowserSessionError):
        await crawl_site(SEED, fast_config, make_factory(browser))
    assert browser.closed


@pytest.mark.asyncio()
async def test_link_names_logged_at_info(fast_config, caplog):
    crawl_logger = get_logger("crawler")
    crawl_logger.addHandler(caplog.handler)
    caplog.set_level(logging.INFO, logger=crawl_logger.name)
    browser = StubBrowser({SEED: page("Home", '<a href="https://other.com/">Team</a>')})
    try:
        await run_crawler(fast_config, browser)
    finally:
        crawl_logger.removeHandler(caplog.handler)

    assert any(r.levelno == logging.INFO and r.getMessage() == "Links: Team" for r in caplog.records)
