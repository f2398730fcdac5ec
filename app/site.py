"""
Navigation chrome shared by the page payloads.
"""
NAV_LINKS = [
    {"label": "Home", "path": "/"},
    {"label": "About", "path": "/about"},
    {"label": "Past Works", "path": "/past-works"},
    {"label": "Commission", "path": "/commission"},
    {"label": "Products", "path": "/products"},
    {"label": "Contact", "path": "/contact"},
]

ADMIN_NAV_LINKS = [
    {"label": "Gallery", "path": "/admin"},
    {"label": "Site Content", "path": "/admin/content"},
    {"label": "Commissions", "path": "/admin/commissions"},
    {"label": "About", "path": "/admin/about"},
    {"label": "Past Works", "path": "/admin/past-works"},
]

LOGIN_PATH = "/admin/login"
ADMIN_HOME_PATH = "/admin"

HOME_COPY_KEYS = ("hero_meta", "hero_title", "gallery_label")
COMMISSION_COPY_KEYS = ("commission_meta", "commission_title", "commission_description")


def page(name: str, **payload) -> dict:
    """Public page payload with the site header navigation."""
    return {"page": name, "nav": NAV_LINKS, **payload}


def admin_page(name: str, user: dict, **payload) -> dict:
    """Admin page payload with the admin sidebar and the signed-in user."""
    return {"page": name, "nav": ADMIN_NAV_LINKS, "user": user, **payload}
