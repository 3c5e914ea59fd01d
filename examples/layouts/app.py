"""Layouts -- wrap a partial, or a block, in another partial.

A partial layout shares the partial's locals and yields to the partial's
output with ``yield_()``. Rendering a layout with a block (a Python
callable) yields the block's output instead.

Run:
    python app.py
"""

from partials import DictLoader, LookupContext, ModelNaming, ViewContext


class User(ModelNaming):
    def __init__(self, name, budget):
        self.name = name
        self.budget = budget


templates = {
    "users/_user.html": "<span>{{ user.name }}</span>",
    "users/_administrator.html": '<div id="administrator">Budget: {{ user.budget }} {{ yield_() }}</div>',
    "users/_card.html": "<section>{{ yield_(user) }}</section>",
}

view = ViewContext(LookupContext(DictLoader(templates), ["users"]))
chief = User("Ada", 100)

partial_layout_output = view.render(
    {"partial": "user", "layout": "administrator", "locals": {"user": chief}}
)

block_layout_output = view.render(
    layout="administrator",
    locals={"user": chief},
    block=lambda: "<h1>Dashboard</h1>",
)

# A partial yields its own arguments back to the block
card_output = view.render(
    {"partial": "card", "collection": [User("Grace", 5), User("Linus", 7)], "as": "user"},
    block=lambda user: f"<b>{user.budget}</b>",
)


def main() -> None:
    print(partial_layout_output)
    print(block_layout_output)
    print(card_output)


if __name__ == "__main__":
    main()
