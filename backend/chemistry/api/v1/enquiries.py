# chemistry/api/v1/enquiries.py
from flask import g, jsonify, request
from flask_jwt_extended import jwt_required
from sqlalchemy import select
from chemistry.extensions import db
from chemistry.models.enquiry import Enquiry
from chemistry.domain.exceptions import ValidationError
from chemistry.application.enquiries.submit_enquiry import submit_enquiry
from chemistry.application.enquiries.close_enquiry import close_enquiry as close_enquiry_service
from chemistry.normalizers.enquiry import normalize_enquiry
from chemistry.normalizers.pagination import normalize_page_of
from chemistry.utils.decorators import feature_enabled, roles_required
from . import v1_bp


@v1_bp.route("/enquiries", methods=["POST"])
@feature_enabled("enquiries")
def create_enquiry():
    data = request.get_json(silent=True) or request.form.to_dict()
    if isinstance(data, dict):
        data = data.get("enquiry", data)
    if not isinstance(data, dict):
        raise ValidationError.single("base", "request body must be a JSON object")

    submit_enquiry(
        data=data,
        remote_ip=request.remote_addr,
        user_agent=request.user_agent.string,
    )

    # Spam and genuine enquiries get the same answer
    return jsonify({"message": "Thank you, your enquiry has been received"}), 201


@v1_bp.route("/enquiries", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_enquiries():
    status = request.args.get("status")  # closed | unclosed | None
    page_num = request.args.get("page", 1, type=int)
    per_page = request.args.get("per_page", 20, type=int)

    query = select(Enquiry)
    if status == "closed":
        query = query.where(Enquiry.closed.is_(True))
    elif status == "unclosed":
        query = query.where(Enquiry.closed.is_(False))

    pagination = db.paginate(
        query.order_by(Enquiry.created_at.desc(), Enquiry.id.desc()),
        page=page_num,
        per_page=per_page,
        max_per_page=100,
        error_out=False,
    )

    return jsonify(normalize_page_of(pagination, normalize_enquiry))


@v1_bp.route("/enquiries/<enquiry_id>/close", methods=["POST"])
@jwt_required()
@roles_required("admin")
def close_enquiry(enquiry_id):
    enquiry = close_enquiry_service(enquiry_id=enquiry_id, actor_id=g.current_user.id)
    return jsonify(normalize_enquiry(enquiry)), 200
