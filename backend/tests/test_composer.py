from datetime import date

from portfolio.application.sections import PageComposer, SectionOrderManager, SectionStore
from portfolio.application.sections.blocks import BlockSpec
from portfolio.data import DataAccessClient
from portfolio.domain.exceptions import DataAccessError
from portfolio.domain.sections import DEFAULT_SECTION_ORDER
from portfolio.extensions import db


class RegistryDownClient(DataAccessClient):
    """Sections cannot be read; every other collection works."""

    def select(self, collection, *args, **kwargs):
        if collection == "sections":
            raise DataAccessError("registry unavailable")
        return super().select(collection, *args, **kwargs)


def stub_blocks(names=DEFAULT_SECTION_ORDER):
    return {
        name: BlockSpec(name.lower().replace(" ", "-"), lambda client: {})
        for name in names
    }


def test_fallback_renders_default_order(app, storage):
    client = RegistryDownClient(db.session, storage)
    store = SectionStore(client)
    composer = PageComposer(client, blocks=stub_blocks())

    composer.load(store)
    page = composer.compose(store)

    assert store.fallback is True
    assert all(s.is_visible for s in store.sections)
    assert page.fallback is True
    assert page.names == list(DEFAULT_SECTION_ORDER)


def test_fallback_with_real_blocks(app, storage):
    client = RegistryDownClient(db.session, storage)
    client.insert("blogs", {
        "title": "Hello", "slug": "hello", "category": "Notes",
        "content": "...", "read_time": "2 min", "status": "published",
    })
    client.insert("certificates", {"title": "Cloud", "issuer": "ACME", "issue_date": date(2024, 1, 5)})

    store = SectionStore(client)
    composer = PageComposer(client)
    composer.load(store)

    assert composer.compose(store).names == list(DEFAULT_SECTION_ORDER)


def test_hidden_sections_are_omitted(data_client, make_sections):
    make_sections("Hero", "About", "Contact")
    store = SectionStore(data_client)
    store.refresh()
    manager = SectionOrderManager(data_client, store)
    composer = PageComposer(data_client, blocks=stub_blocks())

    hero = store.sections[0]
    toggled = manager.toggle_visibility(hero.id)

    assert toggled.is_visible is False
    assert data_client.get("sections", hero.id)["is_visible"] is False
    assert composer.compose(store).names == ["About", "Contact"]


def test_unknown_sections_are_skipped(data_client, make_sections):
    make_sections("Hero", "Testimonials", "Contact")
    store = SectionStore(data_client)
    composer = PageComposer(data_client, blocks=stub_blocks())

    composer.load(store)

    assert composer.compose(store).names == ["Hero", "Contact"]


def test_blocks_follow_order_index(data_client, make_sections):
    make_sections("Contact", "Hero", "Skills")
    store = SectionStore(data_client)
    composer = PageComposer(data_client, blocks=stub_blocks())

    composer.load(store)

    assert composer.compose(store).names == ["Contact", "Hero", "Skills"]


def test_nothing_rendered_while_loading(data_client, make_sections):
    make_sections("Hero", "About")
    store = SectionStore(data_client)
    store.refresh()
    store.loading = True

    page = PageComposer(data_client, blocks=stub_blocks()).compose(store)

    assert page.loading is True
    assert page.blocks == []


def test_blog_block_shows_latest_three_published(data_client, make_sections):
    make_sections("Blog")
    for n in range(4):
        data_client.insert("blogs", {
            "title": f"Post {n}", "slug": f"post-{n}", "category": "Notes",
            "content": "...", "read_time": "1 min", "status": "published",
        })
    data_client.insert("blogs", {
        "title": "Draft", "slug": "draft", "category": "Notes",
        "content": "...", "read_time": "1 min", "status": "draft",
    })
    store = SectionStore(data_client)
    composer = PageComposer(data_client)
    composer.load(store)

    (block,) = composer.compose(store).blocks

    assert block.anchor == "blog"
    assert len(block.data["posts"]) == 3
    assert all(post["status"] == "published" for post in block.data["posts"])


def test_empty_optional_blocks_are_left_out(data_client, make_sections):
    make_sections("Hero", "Blog", "Certificates", "Contact")
    store = SectionStore(data_client)
    composer = PageComposer(data_client)
    composer.load(store)

    page = composer.compose(store)

    assert page.names == ["Hero", "Contact"]
    assert page.blocks[1].data == {"submit_url": "/api/v1/site/messages"}


def test_skills_block_nests_skills_under_categories(data_client, make_sections):
    make_sections("Skills")
    backend = data_client.insert("skill_categories", {"name": "Backend", "order_index": 1})
    data = data_client.insert("skill_categories", {"name": "Data", "order_index": 2})
    data_client.insert("skills", {"name": "Flask", "category_id": backend["id"], "order_index": 1})
    data_client.insert("skills", {"name": "pandas", "category_id": data["id"], "order_index": 1})

    store = SectionStore(data_client)
    composer = PageComposer(data_client)
    composer.load(store)

    (block,) = composer.compose(store).blocks
    categories = block.data["categories"]

    assert [c["name"] for c in categories] == ["Backend", "Data"]
    assert [s["name"] for s in categories[0]["skills"]] == ["Flask"]
    assert [s["name"] for s in categories[1]["skills"]] == ["pandas"]


def test_projects_block_hides_hidden_projects(data_client, make_sections):
    make_sections("Projects")
    data_client.insert("projects", {"title": "Shown", "description": "x", "status": "active"})
    data_client.insert("projects", {"title": "Secret", "description": "x", "status": "hidden"})

    store = SectionStore(data_client)
    composer = PageComposer(data_client)
    composer.load(store)

    (block,) = composer.compose(store).blocks
    assert [p["title"] for p in block.data["projects"]] == ["Shown"]
