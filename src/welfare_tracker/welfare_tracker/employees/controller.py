from __future__ import annotations

from flask import Flask

from ..common.http import int_arg, json_body, json_ok
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        employees = container.welfare_service.get_employees_with_welfare()
        return json_ok(employees, count=len(employees))

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    def create_employee():
        data = json_body()
        employee = container.employee_service.create_employee(
            name=data.get("name", ""),
            phone_number=data.get("phone_number"),
        )
        return json_ok(employee, 201)

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    def get_employee(employee_id: str):
        return json_ok(container.employee_service.get_employee(employee_id))

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="update_employee")
    def update_employee(employee_id: str):
        data = json_body()
        employee = container.employee_service.update_employee(
            employee_id,
            name=data.get("name", ""),
            phone_number=data.get("phone_number"),
        )
        return json_ok(employee)

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="delete_employee")
    def delete_employee(employee_id: str):
        container.employee_service.deactivate_employee(employee_id)
        return json_ok({"employee_id": employee_id, "active": False})

    @app.route("/api/employees/<employee_id>/history", methods=["GET"], endpoint="employee_history")
    def employee_history(employee_id: str):
        history = container.welfare_service.get_employee_history(
            employee_id, limit=int_arg("limit", DEFAULT_HISTORY_LIMIT)
        )
        return json_ok(history)

    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    def dashboard_stats():
        return json_ok(container.welfare_service.get_dashboard_stats())
