"""Year/document discovery and the PDF downloader against a stubbed catalog."""
import pytest
import requests

import responses

from conftest import BASE, listing_page
from pastpaper_crawler.errors import DiscoveryError, DiscoveryFailure, UnexpectedContentType
from pastpaper_crawler.models import Document, DocumentKind, Season
from pastpaper_crawler.scraper import CatalogScraper, Downloader

ALL_SEASONS = frozenset(Season)


@pytest.fixture
def scraper():
    return CatalogScraper(requests.Session(), BASE + "/")


class TestUrls:
    def test_urls(self, scraper, biology):
        doc = Document("2020", Season.SUMMER, DocumentKind.QUESTION_PAPER, "11")
        assert scraper.subject_url(biology) == f"{BASE}/biology-(9700)"
        assert scraper.year_url(biology, "2020") == f"{BASE}/biology-(9700)/2020"
        assert scraper.document_url(biology, doc) == f"{BASE}/biology-(9700)/2020/9700_s20_qp_11.pdf"


class TestDiscoverYears:
    @responses.activate
    def test_keeps_four_character_names(self, scraper, biology):
        responses.add(responses.GET, f"{BASE}/biology-(9700)",
                      body=listing_page("2019", "2020", " 2021 ", "Parent Directory", "Other"), status=200)
        assert scraper.discover_years(biology) == ["2019", "2020", "2021"]
        assert len(responses.calls) == 1

    @responses.activate
    def test_four_character_labels_are_tolerated(self, scraper, biology):
        responses.add(responses.GET, f"{BASE}/biology-(9700)", body=listing_page("2020", "Misc"), status=200)
        assert scraper.discover_years(biology) == ["2020", "Misc"]

    @responses.activate
    def test_no_years_is_not_found(self, scraper, biology):
        responses.add(responses.GET, f"{BASE}/biology-(9700)", body="<html><body>empty</body></html>", status=200)
        with pytest.raises(DiscoveryError) as exc:
            scraper.discover_years(biology)
        assert exc.value.reason is DiscoveryFailure.NOT_FOUND

    @responses.activate
    def test_http_404_is_not_found(self, scraper, biology):
        responses.add(responses.GET, f"{BASE}/biology-(9700)", status=404)
        with pytest.raises(DiscoveryError) as exc:
            scraper.discover_years(biology)
        assert exc.value.reason is DiscoveryFailure.NOT_FOUND

    @responses.activate
    def test_transport_error_is_network(self, scraper, biology):
        responses.add(responses.GET, f"{BASE}/biology-(9700)", body=requests.ConnectionError("boom"))
        with pytest.raises(DiscoveryError) as exc:
            scraper.discover_years(biology)
        assert exc.value.reason is DiscoveryFailure.NETWORK

    @responses.activate
    def test_server_error_is_network(self, scraper, biology):
        responses.add(responses.GET, f"{BASE}/biology-(9700)", status=503)
        with pytest.raises(DiscoveryError) as exc:
            scraper.discover_years(biology)
        assert exc.value.reason is DiscoveryFailure.NETWORK


class TestDiscoverDocuments:
    @responses.activate
    def test_filters_by_kind_and_drops_bad_rows(self, scraper, biology, caplog):
        responses.add(responses.GET, f"{BASE}/biology-(9700)/2020", status=200, body=listing_page(
            "9700_s20_qp_11.pdf", "9700_s20_ms_11.pdf", "9700_w20_qp_12.pdf", "9700_s20_er.pdf", "readme.txt",
        ))
        docs = scraper.discover_documents(biology, "2020", ALL_SEASONS, {DocumentKind.QUESTION_PAPER})
        assert docs == [
            Document("2020", Season.SUMMER, DocumentKind.QUESTION_PAPER, "11"),
            Document("2020", Season.WINTER, DocumentKind.QUESTION_PAPER, "12"),
        ]
        assert "readme.txt" in caplog.text

    @responses.activate
    def test_seasons_are_not_filtered_here(self, scraper, biology):
        responses.add(responses.GET, f"{BASE}/biology-(9700)/2020", status=200,
                      body=listing_page("9700_s20_qp_11.pdf", "9700_w20_qp_11.pdf"))
        docs = scraper.discover_documents(biology, "2020", {Season.SUMMER}, {DocumentKind.QUESTION_PAPER})
        assert {d.season for d in docs} == {Season.SUMMER, Season.WINTER}

    @responses.activate
    def test_missing_year_yields_empty_list(self, scraper):
        from pastpaper_crawler.catalog import find_subject
        music = find_subject("Music")
        responses.add(responses.GET, f"{BASE}/{music.catalog_path}/1999", status=404)
        assert scraper.discover_documents(music, "1999", ALL_SEASONS, set(DocumentKind)) == []

    @responses.activate
    def test_empty_listing_yields_empty_list(self, scraper, biology):
        responses.add(responses.GET, f"{BASE}/biology-(9700)/2020", status=200, body=listing_page())
        assert scraper.discover_documents(biology, "2020", ALL_SEASONS, set(DocumentKind)) == []


class TestDownloader:
    @responses.activate
    def test_download_pdf(self):
        url = f"{BASE}/biology-(9700)/2020/9700_s20_qp_11.pdf"
        responses.add(responses.GET, url, body=b"%PDF-1.4 data", status=200, content_type="application/pdf")
        data, meta = Downloader(requests.Session()).download_pdf(url)
        assert data == b"%PDF-1.4 data"
        assert meta["size_bytes"] == len(data)
        assert meta["status_code"] == 200

    @responses.activate
    def test_http_error_raises(self):
        url = f"{BASE}/missing.pdf"
        responses.add(responses.GET, url, status=404)
        with pytest.raises(requests.HTTPError):
            Downloader(requests.Session()).download_pdf(url)

    @responses.activate
    def test_too_large(self):
        url = f"{BASE}/big.pdf"
        responses.add(responses.GET, url, body=b"x" * (1024 * 1024 + 1), status=200, content_type="application/pdf")
        with pytest.raises(UnexpectedContentType):
            Downloader(requests.Session(), max_size_mb=1).download_pdf(url)

    def test_http_error_closes_streamed_response(self):
        from conftest import FakeSession
        session = FakeSession(delay=0)
        with pytest.raises(requests.HTTPError):
            Downloader(session).download_pdf(f"{BASE}/missing.pdf")
        (resp,) = session.responses
        assert resp.closed
