# tests/test_metadata.py
from conftest import page
from services.extractor.metadata import extract_date, extract_title


def test_og_title_preferred_over_title_tag():
    document = page(
        "<h1>Heading</h1>",
        head='<meta property="og:title" content=" Bridge reopens "><title>Site | Bridge</title>',
    )
    assert extract_title(document) == "Bridge reopens"


def test_title_tag_then_first_heading():
    assert extract_title(page("<h1>Heading</h1>", head="<title> Page title </title>")) == "Page title"
    assert extract_title(page("<h1> First </h1><h1>Second</h1>")) == "First"
    assert extract_title(page("<p>no title here</p>")) is None


def test_date_from_meta_in_priority_order():
    head = (
        '<meta name="date" content="2024-01-01">'
        '<meta property="article:published_time" content="2024-05-02T10:00:00Z">'
    )
    assert extract_date(page("", head=head)) == "2024-05-02T10:00:00Z"


def test_date_from_time_element():
    assert extract_date(page('<time datetime="2024-03-04">March 4</time>')) == "2024-03-04"
    assert extract_date(page("<time> March 4, 2024 </time>")) == "March 4, 2024"


def test_date_from_date_like_element():
    html = "<span class='post-date'> 12 May 2024 </span><span id='date'>other</span>"
    assert extract_date(page(html)) == "12 May 2024"


def test_no_date():
    assert extract_date(page("<p>Nothing dated</p>")) is None
