import logging
from datetime import date, datetime

from dateutil.parser import parse as parse_date

from portfolio.domain.exceptions import DataAccessError, RecordNotFound, ValidationError
from .screen import CollectionScreen, UploadTarget, is_blank, split_list

logger = logging.getLogger(__name__)


def _blank_to_none(data, fields):
    for field in fields:
        if field in data and is_blank(data[field]):
            data[field] = None
    return data


class BlogScreen(CollectionScreen):
    collection = "blogs"
    entity = "blog post"
    fields = ("title", "slug", "category", "content", "read_time", "status")
    required = ("title", "slug", "category", "content", "read_time")
    defaults = {"status": "published"}


class ProjectScreen(CollectionScreen):
    collection = "projects"
    entity = "project"
    fields = (
        "title",
        "category",
        "tech_stack",
        "description",
        "github_url",
        "live_url",
        "image_url",
        "status",
    )
    required = ("title", "description")
    defaults = {"category": "Full Stack", "tech_stack": [], "status": "active"}
    upload = UploadTarget(bucket="projects", prefix="project", field="image_url")

    def clean(self, form, *, partial=False):
        if "tech_stack" in form:
            form = {**form, "tech_stack": split_list(form["tech_stack"])}
        data = super().clean(form, partial=partial)
        return _blank_to_none(data, ("github_url", "live_url", "image_url"))

    def toggle_status(self, record_id):
        """
        Flip active/hidden. On failure the stored record is returned as-is.
        """
        project = self.client.get(self.collection, record_id)
        new_status = "hidden" if project["status"] == "active" else "active"

        try:
            return self.client.update(self.collection, record_id, {"status": new_status})
        except DataAccessError as exc:
            logger.error("Error updating status of project %s: %s", record_id, exc)
            return self.client.get(self.collection, record_id)


class CertificateScreen(CollectionScreen):
    collection = "certificates"
    entity = "certificate"
    fields = ("title", "issuer", "issue_date", "credential_url", "image_url")
    required = ("title", "issuer")
    order_by = "-issue_date"
    upload = UploadTarget(bucket="certificates", prefix="certificate", field="image_url")

    def clean(self, form, *, partial=False):
        data = super().clean(form, partial=partial)

        if not partial or "issue_date" in data:
            data["issue_date"] = self._issue_date(data.get("issue_date"))

        return _blank_to_none(data, ("credential_url", "image_url"))

    @staticmethod
    def _issue_date(value):
        # Defaults to today when left empty
        if is_blank(value):
            return date.today()
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            return parse_date(str(value)).date()
        except (ValueError, OverflowError) as exc:
            raise ValidationError(f"Invalid issue date: {value}", fields=["issue_date"]) from exc


class ExperimentScreen(CollectionScreen):
    collection = "experiments"
    entity = "experiment"
    fields = ("title", "description", "tech_stack", "notebook_url", "dataset_url", "status")
    required = ("title", "description", "tech_stack")
    defaults = {"tech_stack": "", "status": "In Progress"}

    def edit_form(self, record_id):
        form = super().edit_form(record_id)
        # The form edits the stack as one comma-separated string
        form["tech_stack"] = ", ".join(form.get("tech_stack") or [])
        return form

    def clean(self, form, *, partial=False):
        if "tech_stack" in form:
            form = {**form, "tech_stack": split_list(form["tech_stack"])}
        data = super().clean(form, partial=partial)
        return _blank_to_none(data, ("notebook_url", "dataset_url"))


class SkillCategoryScreen(CollectionScreen):
    collection = "skill_categories"
    entity = "skill category"
    fields = ("name",)
    required = ("name",)
    order_by = "order_index"

    def load(self):
        """Categories in order, each with its skills nested."""
        categories = super().load()
        skills = self.client.select("skills", order_by="order_index")

        return [
            {
                **category,
                "skills": [s for s in skills if s["category_id"] == category["id"]],
            }
            for category in categories
        ]

    def create(self, data):
        existing = self.client.select(self.collection)
        data["order_index"] = max((c["order_index"] for c in existing), default=0) + 1
        return super().create(data)


class SkillScreen(CollectionScreen):
    collection = "skills"
    entity = "skill"
    fields = ("name", "category_id")
    required = ("name", "category_id")
    order_by = "order_index"

    def clean(self, form, *, partial=False):
        data = super().clean(form, partial=partial)
        if "category_id" in data:
            self._check_category(data["category_id"])
        return data

    def create(self, data):
        siblings = self.client.select(self.collection, filters={"category_id": data["category_id"]})
        data["order_index"] = max((s["order_index"] for s in siblings), default=0) + 1
        return super().create(data)

    def _check_category(self, category_id):
        try:
            self.client.get("skill_categories", category_id)
        except RecordNotFound:
            raise ValidationError(
                f"Skill category '{category_id}' does not exist",
                fields=["category_id"]
            ) from None


class MessageScreen(CollectionScreen):
    """Inbox for contact-form messages."""

    collection = "messages"
    entity = "message"
    fields = ("name", "email", "message")
    required = ("name", "email", "message")

    def submit(self, form):
        """Public contact form: store a new unread message."""
        data = self.clean(form)
        data["status"] = "unread"
        return self.client.insert(self.collection, data)

    def mark_as_read(self, record_id):
        return self.client.update(self.collection, record_id, {"status": "read"})

    def unread_count(self):
        return len(self.client.select(self.collection, filters={"status": "unread"}))


# URL name -> screen for the generic admin routes
SCREENS = {
    "blogs": BlogScreen,
    "projects": ProjectScreen,
    "certificates": CertificateScreen,
    "experiments": ExperimentScreen,
    "skill-categories": SkillCategoryScreen,
    "skills": SkillScreen,
}
