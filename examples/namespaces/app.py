"""Namespaces -- the same object, rendered from different scopes.

An object's partial path comes from its class name (``Invoice`` →
``invoices/_invoice``). When the view's first search prefix is namespaced
(``admin/billing``), the path moves into that namespace
(``admin/invoices/_invoice``). Paths are memoized per scope and type.

Run:
    python app.py
"""

from partials import (
    DictLoader,
    LookupContext,
    ModelNaming,
    PartialPathRegistry,
    PartialRenderer,
    ViewContext,
)


class Invoice(ModelNaming):
    def __init__(self, number):
        self.number = number


class InvoicePresenter:
    """Renders as the invoice it wraps."""

    def __init__(self, invoice):
        self.invoice = invoice

    def to_model(self):
        return self.invoice


templates = {
    "invoices/_invoice.html": "Invoice #{{ invoice.number }}",
    "admin/invoices/_invoice.html": "Invoice #{{ invoice.number }} [edit]",
}

registry = PartialPathRegistry()
lookup = LookupContext(DictLoader(templates), ["billing"])
view = ViewContext(lookup, PartialRenderer(lookup, registry))
admin_view = view.with_prefixes("admin/billing", "billing")

public_output = view.render(Invoice(7))
admin_output = admin_view.render(Invoice(7))
presenter_output = view.render(InvoicePresenter(Invoice(8)))


def main() -> None:
    print(public_output)
    print(admin_output)
    print(presenter_output)
    print(registry)


if __name__ == "__main__":
    main()
