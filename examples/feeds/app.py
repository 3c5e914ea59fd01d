"""Feeds -- render a list of objects, one partial per element.

Objects name their own partial through ``ModelNaming``: a ``Post`` renders
``posts/_post.html`` with ``post`` and ``post_counter`` bound. A feed that
mixes posts and comments renders each element with its own partial, and a
spacer template separates the segments.

Run:
    python app.py
"""

from partials import DictLoader, LookupContext, ModelNaming, ViewContext


class Post(ModelNaming):
    def __init__(self, title):
        self.title = title


class Comment(ModelNaming):
    def __init__(self, body):
        self.body = body


templates = {
    "posts/_post.html": '<article id="post-{{ post_counter }}">{{ post.title }}</article>',
    "comments/_comment.html": "<p>{{ comment_counter }}: {{ comment.body }}</p>",
    "feed/_divider.html": "<hr>",
    "feed/_entry.html": "<li>{{ entry }}</li>",
}

view = ViewContext(LookupContext(DictLoader(templates), ["feed"]))

posts = [Post("First"), Post("Second")]
feed = [Post("Launch"), Comment("Congrats!"), Post("Roadmap")]

posts_output = view.render(posts)
feed_output = view.render({"partial": feed, "spacer_template": "divider"})
entries_output = view.render({"partial": "entry", "collection": ["a", "b"], "spacer_template": "divider"})
empty_output = view.render([])


def main() -> None:
    print("=== Posts ===")
    print(posts_output)
    print()
    print("=== Mixed feed ===")
    print(feed_output)
    print()
    print("=== Named partial over a collection ===")
    print(entries_output)
    print()
    print(f"Empty collection renders: {empty_output!r}")


if __name__ == "__main__":
    main()
