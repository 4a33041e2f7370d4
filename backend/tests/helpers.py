def og_page(title=None, description=None, image=None, url=None, body=""):
    """Small HTML document carrying the given og:* tags"""
    metas = []
    for prop, value in (("title", title), ("description", description), ("image", image), ("url", url)):
        if value is not None:
            metas.append(f'<meta property="og:{prop}" content="{value}">')
    return f"<html><head>{''.join(metas)}</head><body>{body}</body></html>"


def img_tags(*sources, attr="src"):
    return "".join(f'<img {attr}="{src}">' for src in sources)
