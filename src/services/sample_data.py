"""Sample bookmarks loaded into a fresh store on startup."""
from services.bookmark_store import BookmarkStore
from services.results import Ok

SAMPLE_BOOKMARKS: list[dict] = [
    {
        "url": "https://react.dev",
        "title": "React Documentation",
        "description": "Official React documentation and tutorials",
        "tags": ["react", "javascript", "frontend"],
    },
    {
        "url": "https://nodejs.org",
        "title": "Node.js",
        "description": "JavaScript runtime built on Chrome's V8 engine",
        "tags": ["nodejs", "javascript", "backend"],
    },
    {
        "url": "https://tailwindcss.com",
        "title": "Tailwind CSS",
        "description": "A utility-first CSS framework",
        "tags": ["css", "tailwind", "frontend"],
    },
    {
        "url": "https://fastapi.tiangolo.com",
        "title": "FastAPI",
        "description": "Modern, fast web framework for building APIs with Python",
        "tags": ["fastapi", "python", "backend"],
    },
    {
        "url": "https://vitejs.dev",
        "title": "Vite",
        "description": "Next generation frontend tooling",
        "tags": ["vite", "build-tool", "frontend"],
    },
]


def seed_sample_bookmarks(store: BookmarkStore) -> int:
    """Add the sample bookmarks to `store`. Returns the number added."""
    added = 0
    for payload in SAMPLE_BOOKMARKS:
        if isinstance(store.create(payload), Ok):
            added += 1
    return added
