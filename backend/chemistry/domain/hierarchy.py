"""
Page tree maintenance.

A page's path is the slash-joined slugs from its root down to itself. The
home page contributes no segment, so it lives at the empty path and its
children sit at the top level. Paths are stored, so every structural edit
must rewrite the path of the edited page and of its whole subtree.
"""
from typing import Dict, List, Optional, Set

from sqlalchemy import select

from chemistry.extensions import db
from chemistry.models.page import Page
from chemistry.domain.exceptions import CycleError, ValidationError


def derive_path(parent_path: Optional[str], slug: str, home: bool = False) -> str:
    if home:
        return ""
    if not parent_path:
        return slug
    return f"{parent_path}/{slug}"


def path_for(page: Page) -> str:
    parent_path = page.parent.path if page.parent is not None else None
    return derive_path(parent_path, page.slug, page.home)


def ancestor_ids(page_id: str) -> Set[str]:
    """
    Ids on the chain from ``page_id`` up to its root, ``page_id`` included.

    Walks ``parent_id`` references one row at a time, so it reads the stored
    tree rather than whatever object graph happens to be loaded.
    """
    chain: List[str] = []
    current: Optional[str] = page_id

    while current is not None:
        if current in chain:
            # stored data already loops; refuse to build on it
            raise CycleError(page_id, current)
        chain.append(current)
        current = db.session.execute(
            select(Page.parent_id).where(Page.id == current)
        ).scalar_one_or_none()

    return set(chain)


def assert_acyclic(page: Page, parent_id: Optional[str]) -> None:
    if parent_id is None or page.id is None:
        return

    if parent_id == page.id or page.id in ancestor_ids(parent_id):
        raise CycleError(page.id, parent_id)


def subtree(page: Page) -> List[Page]:
    """The page followed by all of its descendants, breadth first."""
    nodes = [page]
    seen = {id(page)}
    index = 0

    while index < len(nodes):
        for child in nodes[index].child_pages:
            if id(child) not in seen:
                seen.add(id(child))
                nodes.append(child)
        index += 1

    return nodes


def recompute_paths(page: Page) -> List[Page]:
    """
    Rewrite the path of ``page`` and every descendant.

    New paths are checked against pages outside the subtree before anything
    is assigned; a clash raises ValidationError and leaves every path as it
    was. Returns the pages whose path changed.
    """
    nodes = subtree(page)
    new_paths: Dict[int, str] = {}

    for node in nodes:
        if node is page:
            new_paths[id(node)] = path_for(node)
        else:
            new_paths[id(node)] = derive_path(new_paths[id(node.parent)], node.slug, node.home)

    changed = [node for node in nodes if node.path != new_paths[id(node)]]
    if not changed:
        return []

    targets = [new_paths[id(node)] for node in changed]
    if len(set(new_paths.values())) != len(nodes):
        raise ValidationError.single("slug", "has already been taken")

    subtree_ids = [node.id for node in nodes if node.id is not None]
    clash = db.session.execute(
        select(Page.id).where(Page.path.in_(targets), Page.id.notin_(subtree_ids)).limit(1)
    ).scalar_one_or_none()
    if clash is not None:
        raise ValidationError.single("slug", "has already been taken")

    for node in changed:
        node.path = new_paths[id(node)]

    return changed


def set_home(page: Page, home: bool = True) -> List[Page]:
    """
    Flag or unflag ``page`` as the home page. At most one page is home:
    promoting a page demotes the current one, and both subtrees are re-pathed.
    """
    changed: List[Page] = []

    if home:
        previous = db.session.execute(
            select(Page).where(Page.home.is_(True), Page.id != page.id)
        ).scalars().all()
        for other in previous:
            other.home = False
            changed.extend(recompute_paths(other))

    page.home = home
    changed.extend(recompute_paths(page))
    return changed


def sibling_order():
    """Ordering used by navigation and children listings."""
    return [Page.nav_position.asc(), Page.created_at.asc(), Page.id.asc()]
