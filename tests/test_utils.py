from wgetlite.utils import filename_from_url, sanitize_filename

def test_filename_from_url():
    url = "https://example.com/files/image.png"
    assert filename_from_url(url) == "image.png"

def test_filename_ignores_query():
    assert filename_from_url("https://example.com/a/report.pdf?token=abc") == "report.pdf"

def test_filename_is_unquoted():
    assert filename_from_url("https://example.com/photo%20(1).jpg") == "photo (1).jpg"

def test_filename_fallback():
    assert filename_from_url("https://example.com/") == "index.html"
    assert filename_from_url("https://example.com") == "index.html"

def test_sanitize_filename():
    assert sanitize_filename('a:b*c?.txt') == "a_b_c_.txt"
    assert sanitize_filename("..") == "index.html"
