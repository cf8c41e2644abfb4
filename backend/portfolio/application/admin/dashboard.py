from .screens import MessageScreen

# Collections counted on the admin dashboard
DASHBOARD_COLLECTIONS = (
    "blogs",
    "projects",
    "certificates",
    "experiments",
    "skills",
    "messages",
)


def dashboard_summary(client):
    counts = {
        collection: len(client.select(collection))
        for collection in DASHBOARD_COLLECTIONS
    }
    return {
        "counts": counts,
        "unread_messages": MessageScreen(client).unread_count(),
    }
