import httpx


HTML_ACCEPT = "text/html,text/plain;q=0.9,*/*;q=0.8"


def build_contributions_url(url_template: str, username: str) -> str:
    """Fill the upstream contributions URL template with a sanitized username."""

    return url_template.format(username=username)


def fetch_contributions_markup(
    url: str,
    user_agent: str,
    timeout: float,
) -> str:
    """Fetch the public contribution calendar markup for one user.

    A single attempt is made. Non-2xx responses raise `httpx.HTTPStatusError`,
    transport failures raise the matching `httpx.TransportError`.
    """

    response = httpx.get(
        url,
        headers={
            "Accept": HTML_ACCEPT,
            "User-Agent": user_agent,
        },
        timeout=timeout,
        follow_redirects=True,
    )
    response.raise_for_status()
    return response.text
