from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required

from ayurclinic.extensions import db
from ayurclinic.models import User, DoctorProfile, TherapistProfile, Role
from ayurclinic.repositories import ClinicStore
from ayurclinic.routes.auth import EMAIL_RE, MIN_PASSWORD_LENGTH
from ayurclinic.services.email_service import send_welcome_email
from ayurclinic.services.sentiment_service import summarize_by_doctor
from ayurclinic.utils.audit import log_audit
from ayurclinic.utils.decorators import require_role, get_current_user

users_bp = Blueprint("users", __name__, url_prefix="/api")

STAFF_ROLES = ("doctor", "therapist")


@users_bp.route("/users", methods=["GET"])
@jwt_required()
@require_role("admin")
def list_users():
    """
    List registered users, newest first.
    Query params:
        role: admin | doctor | therapist | patient (optional)
    """
    query = User.query
    role = request.args.get("role", type=str)
    if role:
        try:
            query = query.filter(User.role == Role(role))
        except ValueError:
            return jsonify({"success": False, "error": f"Unknown role: {role}"}), 400

    users = query.order_by(User.created_at.desc()).all()
    return jsonify({"success": True, "data": [u.to_dict() for u in users], "total": len(users)}), 200


@users_bp.route("/users", methods=["POST"])
@jwt_required()
@require_role("admin")
def create_user():
    """
    Create a doctor or therapist.
    Body: { name, email, phone, password, role }
    """
    current = get_current_user()
    data = request.get_json(silent=True) or {}

    name = (data.get("name") or "").strip()
    email = (data.get("email") or "").strip().lower()
    phone = (data.get("phone") or "").strip()
    password = data.get("password") or ""
    role = (data.get("role") or "doctor").strip().lower()

    if not name or not email or not phone or not password:
        return jsonify({"success": False, "error": "All fields are required."}), 400
    if role not in STAFF_ROLES:
        return jsonify({"success": False, "error": "Role must be doctor or therapist"}), 400
    if not EMAIL_RE.match(email):
        return jsonify({"success": False, "error": "Invalid email address."}), 400
    if len(password) < MIN_PASSWORD_LENGTH:
        return jsonify({"success": False, "error": "Password should be at least 6 characters."}), 400
    skills = data.get("skills") or []
    if not isinstance(skills, list) or not all(isinstance(s, str) for s in skills):
        return jsonify({"success": False, "error": "skills must be a list of strings"}), 400
    if ClinicStore().get_user_by_email(email):
        return jsonify({"success": False, "error": "This email is already registered."}), 400

    user = User(name=name, email=email, phone=phone, role=Role(role), is_active=True)
    user.set_password(password)
    db.session.add(user)
    db.session.flush()

    if user.role == Role.DOCTOR:
        db.session.add(DoctorProfile(user_id=user.id, specialization=(data.get("specialization") or "").strip()))
    else:
        profile = TherapistProfile(user_id=user.id)
        profile.skills = [s.strip() for s in skills if s.strip()]
        db.session.add(profile)
    db.session.commit()

    login_link = f"{current_app.config['FRONTEND_BASE_URL'].rstrip('/')}/login"
    send_welcome_email(email=user.email, name=user.name, role=role, login_link=login_link)

    log_audit(
        "user",
        "create",
        user_id=current.id,
        entity_id=user.id,
        details={"role": role},
    )

    return jsonify({
        "success": True,
        "message": f"{role.capitalize()} added successfully!",
        "data": user.to_dict(),
    }), 201


@users_bp.route("/users/feedback-summary", methods=["GET"])
@jwt_required()
@require_role("admin")
def feedback_summary():
    """Patient feedback sentiment counts per doctor."""
    store = ClinicStore()
    doctors = User.query.filter_by(role=Role.DOCTOR).all()
    summary = summarize_by_doctor(store.all_feedback(), doctors)
    return jsonify({"success": True, "data": summary}), 200


@users_bp.route("/therapists", methods=["GET"])
@jwt_required()
@require_role("admin", "doctor")
def list_therapists():
    """Therapist directory for the prescription form."""
    items = []
    for t in ClinicStore().list_therapists():
        profile = t.therapist_profile
        items.append({
            "id": t.id,
            "name": t.display_name,
            "email": t.email,
            "skills": profile.skills if profile else [],
        })
    return jsonify({"success": True, "data": items}), 200


@users_bp.route("/doctors", methods=["GET"])
@jwt_required()
@require_role()
def list_doctors():
    """Doctors a patient can book with."""
    doctors = User.query.filter_by(role=Role.DOCTOR, is_active=True).order_by(User.name.asc()).all()
    items = []
    for d in doctors:
        profile = d.doctor_profile
        items.append({
            "id": d.id,
            "name": d.display_name,
            "specialization": profile.specialization if profile else "",
        })
    return jsonify({"success": True, "data": items}), 200
