#!/usr/bin/env python3
"""
Print the dashboard and analytics a user would see.

Usage:
    python3 scripts/print_dashboard.py email password [output.json]
"""

import sys
import json
from pathlib import Path
from dotenv import load_dotenv

# Add the parent directory to the sys.path to import edumanage modules
sys.path.append(str(Path(__file__).parent.parent))

from edumanage.config import load_settings
from edumanage.main import build_store
from edumanage.schemas.actor import AdminActor, ParentActor, StudentActor, TeacherActor, build_actor
from edumanage.schemas.user import User
from edumanage.services import aggregation, dashboards
from edumanage.services.scoping import scope
from edumanage.services.store import load_snapshot

def print_dashboard(email, password, output_file=None):
    """Sign in, scope the store to the user and print their summary."""
    store = build_store(load_settings())
    row, _ = store.sign_in(email, password)
    user = User(**row)

    snapshot = load_snapshot(store)
    actor = build_actor(user, snapshot.students)
    view = scope(snapshot, actor)

    print(f"\n=== {user.display_name} ({user.role}) ===")
    print(f"Students: {len(view.students)}")
    print(f"Courses: {len(view.courses)}")
    print(f"Grades: {len(view.grades)}")
    print(f"Invoices: {len(view.invoices)}")
    print(f"Messages: {len(view.messages)}")

    if isinstance(actor, AdminActor):
        summary = dashboards.admin_dashboard(view.users, view.courses)
    elif isinstance(actor, TeacherActor):
        summary = dashboards.teacher_dashboard(view)
    elif isinstance(actor, ParentActor):
        summary = dashboards.parent_dashboard(view)
    elif isinstance(actor, StudentActor):
        summary = dashboards.student_dashboard(view, actor)
    else:
        print("Unknown role, nothing to show")
        return

    print("\n=== Dashboard ===")
    for key, value in summary.items():
        if isinstance(value, list):
            print(f"  {key}: {len(value)} item(s)")
        else:
            print(f"  {key}: {value}")

    if isinstance(actor, (AdminActor, TeacherActor)):
        print("\n=== Analytics ===")
        for key, value in dashboards.analytics_summary(view).items():
            print(f"  {key}: {value}")

    print("\n=== Averages ===")
    for student in view.students:
        averages = aggregation.subject_averages(view.grades, student.id)
        print(f"  {student.first_name} {student.last_name}: {averages}")

    if output_file:
        with open(output_file, "w") as f:
            json.dump(view.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
        print(f"\nScoped data saved to: {output_file}")

if __name__ == "__main__":
    # Load environment variables
    load_dotenv()

    if len(sys.argv) < 3:
        print("Usage: python3 scripts/print_dashboard.py email password [output.json]")
        sys.exit(1)

    print_dashboard(sys.argv[1], sys.argv[2], sys.argv[3] if len(sys.argv) > 3 else None)
