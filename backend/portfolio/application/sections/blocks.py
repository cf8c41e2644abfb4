"""
Renderers for the public page sections.

Each renderer takes a data access client and returns the content of its
block, or None when the block has nothing to show and should be left out.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

CONTACT_ENDPOINT = "/api/v1/site/messages"
BLOG_PREVIEW_LIMIT = 3


@dataclass(frozen=True)
class BlockSpec:
    anchor: str
    render: Callable[[Any], Optional[Dict[str, Any]]]
    # Leave the block out entirely when its data cannot be loaded
    optional: bool = False


def site_settings(client) -> Dict[str, Any]:
    rows = client.select("site_settings", order_by="created_at", limit=1)
    return rows[0] if rows else {}


def render_hero(client):
    settings = site_settings(client)
    return {
        "resume_url": settings.get("resume_url"),
        "hero_image_url": settings.get("hero_image_url"),
    }


def render_about(client):
    return {}


def render_skills(client):
    categories = client.select("skill_categories", order_by="order_index")
    skills = client.select("skills", order_by="order_index")

    return {
        "categories": [
            {
                **category,
                "skills": [s for s in skills if s["category_id"] == category["id"]],
            }
            for category in categories
        ]
    }


def render_projects(client):
    return {
        "projects": client.select(
            "projects", filters={"status": "active"}, order_by="-created_at"
        )
    }


def render_lab(client):
    return {"experiments": client.select("experiments", order_by="-created_at")}


def render_blog(client):
    posts = client.select(
        "blogs",
        filters={"status": "published"},
        order_by="-created_at",
        limit=BLOG_PREVIEW_LIMIT,
    )
    if not posts:
        return None
    return {"posts": posts}


def render_certificates(client):
    certificates = client.select("certificates", order_by="-issue_date")
    if not certificates:
        return None
    return {"certificates": certificates}


def render_contact(client):
    return {"submit_url": CONTACT_ENDPOINT}


# Section name -> block. Keep in step with DEFAULT_SECTION_ORDER.
SECTION_BLOCKS: Dict[str, BlockSpec] = {
    "Hero": BlockSpec("home", render_hero),
    "About": BlockSpec("about", render_about),
    "Skills": BlockSpec("skills", render_skills),
    "Projects": BlockSpec("projects", render_projects),
    "Data Science Lab": BlockSpec("lab", render_lab),
    "Blog": BlockSpec("blog", render_blog, optional=True),
    "Certificates": BlockSpec("certificates", render_certificates, optional=True),
    "Contact": BlockSpec("contact", render_contact),
}
