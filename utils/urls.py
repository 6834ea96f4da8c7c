def normalize_url(url: str) -> str:
    """Trim and prepend https:// when no http(s) scheme is present. No validation."""
    url = (url or "").strip()
    if not url.startswith("http://") and not url.startswith("https://"):
        url = "https://" + url
    return url


def with_www(url: str) -> str:
    """Insert a www. subdomain after the scheme of a normalized URL."""
    return url.replace("://", "://www.", 1)
