"""Write hooks for product documents.

Hooks in ``BEFORE_VALIDATE_HOOKS`` run on the raw draft of every product
create/update, before validation and persistence. Each hook receives the
mutable draft dict and returns it.
"""

from collections.abc import Callable, MutableMapping
from typing import Any

from storefront.catalog.slugs import slugify

Draft = MutableMapping[str, Any]
Hook = Callable[[Draft], Draft]


def assign_slug(draft: Draft) -> Draft:
    """Fill ``slug`` from ``name`` when the draft has no slug.

    A blank or whitespace-only slug counts as missing.

    An existing slug is never regenerated. Drafts without a name are left
    alone; rejecting them is up to validation.
    """
    if not str(draft.get("slug") or "").strip() and draft.get("name"):
        draft["slug"] = slugify(str(draft["name"]))
    return draft


BEFORE_VALIDATE_HOOKS: list[Hook] = [assign_slug]


def run_before_validate(draft: Draft, hooks: list[Hook] | None = None) -> Draft:
    """Run before-validate hooks over ``draft`` in registration order."""
    for hook in BEFORE_VALIDATE_HOOKS if hooks is None else hooks:
        draft = hook(draft)
    return draft
