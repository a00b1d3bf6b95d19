# chemistry/api/v1/public.py
from flask import current_app, g, jsonify, request
from chemistry.domain.exceptions import PageNotFound
from chemistry.domain.freshness import is_fresh, page_validator
from chemistry.domain.resolver import resolve, resolve_not_found
from chemistry.application.cms.list_pages import (
    bundle_pages,
    bundle_validator,
    child_pages,
    latest_pages,
    navigation_pages,
)
from chemistry.normalizers.page import normalize_published_page
from chemistry.normalizers.pagination import normalize_page_of
from chemistry.utils.decorators import feature_enabled
from . import v1_bp


def _viewer():
    return g.get("current_user")


def _stamp(response, validator):
    """Attach ETag, Last-Modified and Cache-Control for a validator."""
    if validator is None:
        return response

    response.set_etag(validator.etag)
    if validator.last_modified is not None:
        response.last_modified = validator.last_modified

    # signed-in viewers may see private pages; keep those out of shared caches
    response.vary.add("Authorization")
    if _viewer() is None:
        response.cache_control.public = True
    else:
        response.cache_control.private = True
    return response


def _fresh(validator):
    return is_fresh(validator, request.if_none_match, request.if_modified_since)


def _not_modified(validator):
    return _stamp(current_app.response_class(status=304), validator)


def _excerpt(page):
    return normalize_published_page(page, include_content=False)


# ------------------------
# Single pages
# ------------------------

@v1_bp.route("/published/", defaults={"path": ""}, methods=["GET"])
@v1_bp.route("/published/<path:path>", methods=["GET"])
def published(path):
    try:
        page = resolve(path, _viewer())
    except PageNotFound:
        return page_not_found()

    validator = page_validator(page)
    if _fresh(validator):
        return _not_modified(validator)

    return _stamp(jsonify(normalize_published_page(page)), validator)


@v1_bp.route("/home", methods=["GET"])
def home():
    return published("")


def page_not_found():
    """The configured 404 page when there is one, a bare error otherwise."""
    try:
        page = resolve_not_found(_viewer())
    except PageNotFound:
        return jsonify({"error": "NotFound", "message": "Page not found"}), 404

    return jsonify(normalize_published_page(page)), 404


# ------------------------
# Listings
# ------------------------

@v1_bp.route("/latest", methods=["GET"])
def latest():
    limit = request.args.get("limit", type=int)
    parent = request.args.get("parent")

    pages, validator = latest_pages(parent_path=parent, limit=limit, viewer=_viewer())
    if _fresh(validator):
        return _not_modified(validator)

    return _stamp(jsonify([_excerpt(p) for p in pages]), validator)


@v1_bp.route("/children", methods=["GET"])
def children():
    pagination = child_pages(
        parent_path=request.args.get("parent", ""),
        sort_field=request.args.get("sort", "nav_position"),
        sort_order=request.args.get("order", "asc"),
        page_number=request.args.get("page", 1, type=int),
        page_size=request.args.get("per_page", type=int),
        viewer=_viewer(),
    )

    return jsonify(normalize_page_of(pagination, _excerpt))


@v1_bp.route("/nav", methods=["GET"])
def nav():
    return jsonify([_excerpt(p) for p in navigation_pages(viewer=_viewer())])


@v1_bp.route("/bundle", methods=["GET"])
@feature_enabled("bundle")
def bundle():
    """
    Every published page with its content, for apps that ship the site
    offline. Bulky, so the validator is checked before anything is loaded.
    """
    viewer = _viewer()
    validator = bundle_validator(viewer=viewer)
    if validator is None:
        return jsonify({"pages": []})

    if _fresh(validator):
        return _not_modified(validator)

    pages = bundle_pages(viewer=viewer)
    return _stamp(jsonify({"pages": [normalize_published_page(p) for p in pages]}), validator)
