"""Hello World -- the simplest partials example.

Render a partial by name from an in-memory loader. The partial
``greeting`` lives at ``pages/_greeting.html`` and receives its locals.

Run:
    python app.py
"""

from partials import DictLoader, LookupContext, ViewContext

templates = {
    "pages/_greeting.html": "Hello, {{ name }}!",
}

view = ViewContext(LookupContext(DictLoader(templates), ["pages"]))

output = view.render("greeting", {"name": "World"})


def main() -> None:
    print(output)
    print()

    # Same partial, different locals
    for name in ["Partials", "Jinja", "<Python>"]:
        print(view.render("greeting", {"name": name}))


if __name__ == "__main__":
    main()
