from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date
from ..common.web import SESSION_KEY, current_session, login_required, require_screen
from ..core.enums import Screen
from ..container import Container
from .model import EmployeeProfile


def _profile_json(p: EmployeeProfile) -> dict:
    return {
        "employee_id": p.employee_id,
        "login_id": p.login_id,
        "full_name": p.full_name,
        "contract_type": p.contract_type.value,
        "custom_check_in_time": p.custom_check_in_time.strftime("%H:%M") if p.custom_check_in_time else None,
        "custom_check_out_time": p.custom_check_out_time.strftime("%H:%M") if p.custom_check_out_time else None,
        "hire_date": p.hire_date.strftime("%Y-%m-%d"),
        "status": p.status.value,
        "base_salary": p.base_salary,
        "device_verification_enabled": p.device_verification_enabled,
        "device_bound": bool(p.device_id),
        "permissions": list(p.permissions),
        "is_admin": p.is_admin,
        "is_hr": p.is_hr,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or request.form
        ctx = container.auth_service.authenticate(data.get("login_id", ""), data.get("password", ""))
        session.clear()
        session[SESSION_KEY] = ctx.to_dict()
        return jsonify({"success": True, "session": ctx.to_dict()})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/me", endpoint="me")
    @login_required
    def me():
        return jsonify({"success": True, "session": current_session().to_dict()})

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @require_screen(Screen.EMPLOYEES.value)
    def list_employees():
        employees = container.employee_service.list_all(current_session())
        return jsonify({"success": True, "employees": [_profile_json(p) for p in employees]})

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @require_screen(Screen.EMPLOYEES.value)
    def create_employee():
        data = request.get_json(silent=True) or {}
        hire_date = data.get("hire_date")
        profile = container.employee_service.create(
            current_session(),
            login_id=data.get("login_id", ""),
            full_name=data.get("full_name", ""),
            password=data.get("password", ""),
            contract_type=data.get("contract_type", "full-time"),
            custom_check_in_time=data.get("custom_check_in_time"),
            custom_check_out_time=data.get("custom_check_out_time"),
            hire_date=parse_iso_date(hire_date) if hire_date else None,
            base_salary=data.get("base_salary", 0),
            device_verification_enabled=bool(data.get("device_verification_enabled", False)),
            permissions=data.get("permissions") or [],
            is_hr=bool(data.get("is_hr", False)),
        )
        return jsonify({"success": True, "employee": _profile_json(profile)}), 201

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    def get_employee(employee_id: str):
        profile = container.employee_service.get(current_session(), employee_id)
        return jsonify({"success": True, "employee": _profile_json(profile)})

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="update_employee")
    @require_screen(Screen.EMPLOYEES.value)
    def update_employee(employee_id: str):
        data = request.get_json(silent=True) or {}
        profile = container.employee_service.update(current_session(), employee_id, **data)
        return jsonify({"success": True, "employee": _profile_json(profile)})

    @app.route("/api/employees/<employee_id>/deactivate", methods=["POST"], endpoint="deactivate_employee")
    @require_screen(Screen.EMPLOYEES.value)
    def deactivate_employee(employee_id: str):
        container.employee_service.deactivate(current_session(), employee_id)
        return jsonify({"success": True})

    @app.route("/api/employees/<employee_id>/reset-device", methods=["POST"], endpoint="reset_employee_device")
    @require_screen(Screen.EMPLOYEES.value)
    def reset_employee_device(employee_id: str):
        container.employee_service.reset_device(current_session(), employee_id)
        return jsonify({"success": True})
