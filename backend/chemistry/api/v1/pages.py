# chemistry/api/v1/pages.py
from flask import g, request, jsonify
from flask_jwt_extended import jwt_required
from sqlalchemy import select
from chemistry.extensions import db
from chemistry.models.page import Page
from chemistry.models.section_type import SectionType
from chemistry.models.user import AUTHOR_ROLES
from chemistry.domain.exceptions import PageNotFound, ValidationError
from chemistry.application.cms.create_page import create_page as create_page_service
from chemistry.application.cms.update_page import update_page as update_page_service
from chemistry.application.cms.publish_page import publish_page as publish_page_service
from chemistry.application.cms.unpublish_page import unpublish_page as unpublish_page_service
from chemistry.application.cms.reassign_page import UNCHANGED, reassign_page
from chemistry.application.cms.delete_page import delete_page as delete_page_service
from chemistry.application.cms.section_types import create_section_type as create_section_type_service
from chemistry.normalizers.page import normalize_page, normalize_page_summary, normalize_version
from chemistry.normalizers.section import normalize_section_type
from chemistry.normalizers.pagination import normalize_page_of
from chemistry.utils.decorators import roles_required
from chemistry.utils.optimistic_lock import enforce_optimistic_lock
from . import v1_bp

AUTHORS = AUTHOR_ROLES


def _actor_id():
    return g.current_user.id if g.get("current_user") else None


def _load_page(page_id):
    page = db.session.get(Page, page_id)
    if page is None:
        raise PageNotFound()
    return page


def _payload(wrapper=None):
    """JSON object body, optionally nested under ``wrapper``."""
    data = request.get_json(silent=True) or {}
    if wrapper and isinstance(data, dict):
        data = data.get(wrapper, data)
    if not isinstance(data, dict):
        raise ValidationError.single("base", "request body must be a JSON object")
    return data


# ------------------------
# Pages
# ------------------------

@v1_bp.route("/pages", methods=["GET"])
@jwt_required()
@roles_required(*AUTHORS)
def list_pages():
    status = request.args.get("status")  # draft | published | None
    page_num = request.args.get("page", 1, type=int)
    per_page = request.args.get("per_page", 20, type=int)

    query = select(Page)
    if status == "published":
        query = query.where(Page.published_at.is_not(None))
    elif status == "draft":
        query = query.where(Page.published_at.is_(None))

    pagination = db.paginate(
        query.order_by(Page.created_at.desc(), Page.id.desc()),
        page=page_num,
        per_page=per_page,
        max_per_page=100,
        error_out=False,
    )

    return jsonify(normalize_page_of(pagination, normalize_page_summary))


@v1_bp.route("/pages", methods=["POST"])
@jwt_required()
@roles_required(*AUTHORS)
def create_page():
    page = create_page_service(actor_id=_actor_id(), data=_payload("page"))

    return jsonify(normalize_page(page, admin=True)), 201


@v1_bp.route("/pages/<page_id>", methods=["GET"])
@jwt_required()
@roles_required(*AUTHORS)
def get_page(page_id):
    return jsonify(normalize_page(_load_page(page_id), admin=True))


@v1_bp.route("/pages/<page_id>", methods=["PUT", "PATCH"])
@jwt_required()
@roles_required(*AUTHORS)
def update_page(page_id):
    page = _load_page(page_id)

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(page)

    page = update_page_service(page_id=page.id, actor_id=_actor_id(), data=_payload("page"))

    return jsonify(normalize_page(page, admin=True)), 200


@v1_bp.route("/pages/<page_id>/publish", methods=["POST"])
@jwt_required()
@roles_required(*AUTHORS)
def publish_page(page_id):
    page = publish_page_service(
        page_id=page_id,
        actor_id=_actor_id(),
        overrides=_payload("page"),
    )

    return jsonify(normalize_page(page, admin=True)), 200


@v1_bp.route("/pages/<page_id>/unpublish", methods=["POST"])
@jwt_required()
@roles_required(*AUTHORS)
def unpublish_page(page_id):
    page = unpublish_page_service(page_id=page_id, actor_id=_actor_id())

    return jsonify(normalize_page(page, admin=True)), 200


@v1_bp.route("/pages/<page_id>/move", methods=["POST"])
@jwt_required()
@roles_required(*AUTHORS)
def move_page(page_id):
    data = _payload()

    new_parent_id = UNCHANGED
    if "parent_id" in data:
        new_parent_id = data["parent_id"] or None

    page = reassign_page(
        page_id=page_id,
        new_parent_id=new_parent_id,
        new_slug=data.get("slug"),
        actor_id=_actor_id(),
    )

    return jsonify(normalize_page(page, admin=True)), 200


@v1_bp.route("/pages/<page_id>", methods=["DELETE"])
@jwt_required()
@roles_required(*AUTHORS)
def delete_page(page_id):
    delete_page_service(page_id=page_id, actor_id=_actor_id())
    return "", 204


@v1_bp.route("/pages/<page_id>/versions", methods=["GET"])
@jwt_required()
@roles_required(*AUTHORS)
def list_versions(page_id):
    page = _load_page(page_id)
    return jsonify([normalize_version(v) for v in page.versions])


# ------------------------
# Editing UI support
# ------------------------

@v1_bp.route("/site", methods=["GET"])
@jwt_required()
@roles_required(*AUTHORS)
def site():
    pages = db.session.execute(select(Page).order_by(Page.path.asc())).scalars().all()
    section_types = db.session.execute(
        select(SectionType).order_by(SectionType.title.asc())
    ).scalars().all()

    return jsonify({
        "pages": [normalize_page_summary(p) for p in pages],
        "section_types": [normalize_section_type(t) for t in section_types],
    })


@v1_bp.route("/section_types", methods=["GET"])
@jwt_required()
@roles_required(*AUTHORS)
def list_section_types():
    section_types = db.session.execute(
        select(SectionType).order_by(SectionType.title.asc())
    ).scalars().all()
    return jsonify([normalize_section_type(t) for t in section_types])


@v1_bp.route("/section_types", methods=["POST"])
@jwt_required()
@roles_required("admin")
def create_section_type():
    section_type = create_section_type_service(data=_payload())
    return jsonify(normalize_section_type(section_type)), 201
