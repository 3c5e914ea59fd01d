"""File-based partials -- the most common real-world pattern.

Loads partials from disk with FileSystemLoader. Candidate names try each
extension in order (``_user``, ``_user.html``, ``_user.html.jinja``,
``_user.jinja``), so ``.html`` and ``.html.jinja`` files live side by side.
A partial can render further partials with ``render(...)``.

Run:
    python app.py
"""

from pathlib import Path

from partials import FileSystemLoader, LookupContext, ModelNaming, ViewContext

templates_dir = Path(__file__).parent / "templates"


class User(ModelNaming):
    def __init__(self, name, admin=False):
        self.name = name
        self.admin = admin


view = ViewContext(LookupContext(FileSystemLoader(templates_dir), ["users", "shared"]))

nav_output = view.render(
    "shared/nav",
    {"links": [{"url": "/", "label": "Home"}, {"url": "/users", "label": "Users"}]},
)

list_output = view.render("list", {"users": [User("Ada", admin=True), User("Grace")]})


def main() -> None:
    print(nav_output)
    print(list_output)
    print()
    print("Templates:", ", ".join(view.lookup.loader.list_templates()))


if __name__ == "__main__":
    main()
