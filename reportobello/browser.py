"""
Helpers for showing a rendered report in a browser.

These only build URLs and hand them to the browser; they make no requests.
"""

import html
import logging
import webbrowser
from typing import Optional
from urllib.parse import urlencode, urlsplit, urlunsplit

logger = logging.getLogger(__name__)

# PDF viewer options for embedded reports
IFRAME_VIEWER_FRAGMENT = "zoom=47&toolbar=0&navpanes=0&view=FitH"


def add_download_options(
    url: str,
    download_as: Optional[str] = None,
    download: bool = False,
) -> str:
    """
    Replace the query of a report URL with the download options.

    Args:
        url: Report URL
        download_as: File name the browser should save the PDF as
        download: Ask the service to send the PDF as an attachment

    Returns:
        The URL with only downloadAs/download in its query
    """
    params = []
    if download_as is not None:
        params.append(("downloadAs", download_as))
    if download:
        params.append(("download", "true"))

    parts = urlsplit(str(url))
    return urlunsplit(parts._replace(query=urlencode(params)))


def open_in_new_tab(
    url: str,
    download_as: Optional[str] = None,
    download: bool = False,
) -> bool:
    """
    Open a report in a new browser tab.

    Returns:
        True if a browser was launched
    """
    target = add_download_options(url, download_as, download)
    logger.debug("Opening %s", target)
    return webbrowser.open_new_tab(target)


def download(url: str, download_as: str = "report.pdf") -> bool:
    """Open a report in a new tab and have the browser download it."""
    return open_in_new_tab(url, download_as, download=True)


def iframe_src(url: str, download_as: Optional[str] = None) -> str:
    """Get the src for embedding a report in an iframe."""
    target = add_download_options(url, download_as)
    parts = urlsplit(target)
    return urlunsplit(parts._replace(fragment=IFRAME_VIEWER_FRAGMENT))


def iframe_html(url: str, download_as: Optional[str] = None, **attrs: str) -> str:
    """
    Render an <iframe> element showing a report.

    Extra keyword arguments become attributes; underscores turn into dashes
    and a trailing underscore is dropped (class_="report" -> class="report").
    """
    rendered = [f'src="{html.escape(iframe_src(url, download_as))}"']
    for name, value in attrs.items():
        attr = name.rstrip("_").replace("_", "-")
        rendered.append(f'{attr}="{html.escape(str(value))}"')

    return f"<iframe {' '.join(rendered)}></iframe>"
