"""Contacts — a small address-book state tree.

Declared deliberately out of order: the detail and edit states arrive
before ``contacts`` and resolve the moment it is registered.

Inspect:
    roost states examples.contacts.states --pending
"""

from roost import Registry, RegistryConfig

registry = Registry(RegistryConfig(strict=True))

# Children first: these wait in the pending queue.
registry.state(
    "contacts.detail",
    url="/{contact_id:int}",
    views={
        "": {"template": "contacts/detail.html"},
        "hint@": {"template": "contacts/hint.html"},
    },
)
registry.state(
    "contacts.detail.edit",
    views={"@contacts.detail": {"template": "contacts/edit.html"}},
    data={"editing": True},
)
registry.state("contacts.list", url="/?sort&page", template="contacts/list.html")

# The parent arrives and unblocks everything above.
registry.state(
    "contacts",
    url="/contacts",
    abstract=True,
    data={"section": "people"},
    template="contacts/base.html",
)

registry.state("home", url="/", template="home.html")
registry.state("about", url="^/about", template="about.html")
registry.state("print", parent="contacts.detail", url="^/print/{contact_id:int}")

registry.freeze()
