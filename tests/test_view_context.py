"""End-to-end rendering through ViewContext with Jinja2 templates."""

import pytest
from markupsafe import Markup

from partials import (
    ErrorCode,
    InvalidIdentifierError,
    PartialDepthError,
    TemplateNotFoundError,
    TemplateRuntimeError,
)

from .models import Comment, Post, User

USER = "<li>{{ user.name }}</li>"
ADMINISTRATOR = "<div>Budget: {{ user.budget }} {{ yield_() }}</div>"


class TestRender:
    """Single partials."""

    def test_string_partial(self, jinja_view):
        view = jinja_view({"users/_user.html": USER})
        assert view.render("user", {"user": User("ann")}) == Markup("<li>ann</li>")

    def test_autoescape(self, jinja_view):
        """Values from locals are escaped."""
        view = jinja_view({"users/_user.html": USER})
        assert view.render("user", {"user": User("<script>")}) == "<li>&lt;script&gt;</li>"

    def test_autoescape_off(self, jinja_view):
        view = jinja_view({"users/_user.html": USER}, autoescape=False)
        assert view.render("user", {"user": User("<b>")}) == "<li><b></li>"

    def test_object_partial(self, jinja_view):
        view = jinja_view({"posts/_post.html": "<h1>{{ post.title }}</h1>"})
        assert view.render(Post("Hello")) == "<h1>Hello</h1>"

    def test_shared_partial(self, jinja_view):
        view = jinja_view({"shared/_nav.html": "<nav>{{ nav or '' }}</nav>"})
        assert view.render("shared/nav") == "<nav></nav>"

    def test_keyword_options(self, jinja_view):
        view = jinja_view({"users/_user.html": USER})
        assert view.render(partial="user", locals={"user": User("kw")}) == "<li>kw</li>"

    def test_locals_override_helpers(self, jinja_view):
        view = jinja_view({"users/_note.html": "{{ render }}"})
        assert view.render("note", {"render": "mine"}) == "mine"

    def test_missing_partial(self, jinja_view):
        view = jinja_view({})
        with pytest.raises(TemplateNotFoundError, match="Missing partial user"):
            view.render("user")

    def test_invalid_identifier(self, jinja_view):
        view = jinja_view({"users/_123bad.html": ""})
        with pytest.raises(InvalidIdentifierError):
            view.render("123bad")

    def test_no_partial(self, jinja_view):
        view = jinja_view({})
        with pytest.raises(TypeError, match="needs a partial"):
            view.render()
        with pytest.raises(TypeError):
            view.render(locals={"user": User("a")})


class TestCollections:
    """Collections of partials."""

    def test_counter(self, jinja_view):
        view = jinja_view({"users/_user.html": "{{ user_counter }}:{{ user.name }};"})
        result = view.render({"partial": "user", "collection": [User("a"), User("b")]})
        assert result == "0:a;1:b;"

    def test_spacer_is_not_escaped(self, jinja_view):
        view = jinja_view({"users/_user.html": USER, "users/_divider.html": "<hr>"})
        result = view.render(
            {"partial": "user", "collection": [User("a"), User("b")], "spacer_template": "divider"}
        )
        assert result == Markup("<li>a</li><hr><li>b</li>")

    def test_heterogeneous(self, jinja_view):
        view = jinja_view({
            "posts/_post.html": "P{{ post_counter }}",
            "comments/_comment.html": "C{{ comment_counter }}",
        })
        assert view.render([Post("a"), Comment("b"), Post("c")]) == "P0C1P2"

    def test_empty_collection(self, jinja_view):
        view = jinja_view({})
        assert view.render([]) is None
        assert view.render({"partial": "user", "collection": None}) is None

    def test_empty_nested_collection_prints_nothing(self, jinja_view):
        view = jinja_view({"posts/_post.html": "<article>{{ render(post.comments) }}</article>"})
        assert view.render(Post("a")) == "<article></article>"


class TestLayouts:
    """Partial layouts and block layouts."""

    def test_partial_layout(self, jinja_view):
        view = jinja_view({"users/_user.html": USER, "users/_administrator.html": ADMINISTRATOR})
        result = view.render(
            {"partial": "user", "layout": "administrator", "locals": {"user": User("chief", 100)}}
        )
        assert result == Markup("<div>Budget: 100 <li>chief</li></div>")

    def test_block_layout(self, jinja_view):
        view = jinja_view({"users/_administrator.html": ADMINISTRATOR})
        result = view.render(
            layout="administrator", locals={"user": User("chief", 100)}, block=lambda: "Title"
        )
        assert result == "<div>Budget: 100 Title</div>"

    def test_collection_yields_to_block(self, jinja_view):
        view = jinja_view({"users/_user.html": "<li>{{ yield_(user) }}</li>"})
        result = view.render([User("a"), User("b")], block=lambda user: f"*{user.name}*")
        assert result == "<li>*a*</li><li>*b*</li>"

    def test_yield_without_block_reads_layout_content(self, jinja_view):
        view = jinja_view({"users/_frame.html": "<main>{{ yield_() }}</main>"})
        view.content_for("layout", Markup("<p>body</p>"))
        assert view.render("frame") == "<main><p>body</p></main>"

    def test_custom_yield_name(self, jinja_view):
        view = jinja_view(
            {"users/_user.html": USER, "users/_box.html": "<div>{{ content() }}</div>"},
            yield_name="content",
        )
        result = view.render({"partial": "user", "layout": "box", "locals": {"user": User("a")}})
        assert result == "<div><li>a</li></div>"


class TestNesting:
    """Templates calling render()."""

    def test_nested_collection(self, jinja_view):
        view = jinja_view(
            {
                "posts/_post.html": "<article>{{ post.title }}{{ render(post.comments) }}</article>",
                "comments/_comment.html": "<p>{{ comment.body }}</p>",
            },
            prefixes=("posts",),
        )
        post = Post("T", [Comment("x"), Comment("<y>")])
        assert view.render(post) == "<article>T<p>x</p><p>&lt;y&gt;</p></article>"

    def test_render_with_locals(self, jinja_view):
        view = jinja_view({
            "users/_card.html": "[{{ render('avatar', {'size': 2}) }}]",
            "users/_avatar.html": "{{ size }}",
        })
        assert view.render("card") == "[2]"

    def test_self_rendering_partial_stops(self, jinja_view):
        view = jinja_view({"users/_loop.html": "{{ render('loop') }}"}, max_partial_depth=5)
        with pytest.raises(PartialDepthError) as exc_info:
            view.render("loop")
        assert exc_info.value.code is ErrorCode.PARTIAL_DEPTH


class TestRuntimeErrors:
    """Jinja errors carry the partial stack."""

    def test_undefined_variable(self, jinja_view):
        view = jinja_view({"users/_user.html": "{{ missing }}"})

        with pytest.raises(TemplateRuntimeError) as exc_info:
            view.render("user")

        error = exc_info.value
        assert error.code is ErrorCode.RUNTIME_ERROR
        assert error.template_name == "users/_user.html"
        assert error.template_stack == ["user"]
        assert "locals (given: user)" in error.suggestion
        assert "'missing' is undefined" in str(error)

    def test_undefined_allowed_without_strict_mode(self, jinja_view):
        view = jinja_view({"users/_user.html": "[{{ missing }}]"}, strict_undefined=False)
        assert view.render("user") == "[]"

    def test_nested_error_keeps_inner_stack(self, jinja_view):
        view = jinja_view(
            {
                "posts/_post.html": "{{ render(post.comments) }}",
                "comments/_comment.html": "{{ comment.missing.attr }}",
            },
            prefixes=("posts",),
        )

        with pytest.raises(TemplateRuntimeError) as exc_info:
            view.render(Post("a", [Comment("b")]))

        assert exc_info.value.template_name == "comments/_comment.html"
        assert exc_info.value.template_stack == ["posts/post", "comments/comment"]


class TestContentFor:
    """Named content sections."""

    def test_store_and_read(self, jinja_view):
        view = jinja_view({"users/_user.html": "{{ content_for('title', user.name) }}<li></li>"})

        assert view.render("user", {"user": User("<ann>")}) == "<li></li>"
        assert view.content_for("title") == Markup("&lt;ann&gt;")

    def test_sections_append(self, jinja_view):
        view = jinja_view({})
        view.content_for("head", Markup("<a>"))
        view.content_for("head", "<b>")
        assert view.content_for("head") == Markup("<a>&lt;b&gt;")

    def test_unknown_section_is_empty(self, jinja_view):
        assert jinja_view({}).content_for("nothing") == Markup("")


class TestWithPrefixes:
    """Views for other scopes."""

    def test_namespaced_scope(self, jinja_view):
        view = jinja_view({
            "posts/_post.html": "public {{ post.title }}",
            "admin/posts/_post.html": "admin {{ post.title }}",
        })
        admin = view.with_prefixes("admin/users", "application")

        assert admin.render(Post("x")) == "admin x"
        assert view.render(Post("x")) == "public x"
        assert admin.renderer.registry is view.renderer.registry
        assert admin.lookup.prefixes == ("admin/users", "application")
