import logging

from extensions import db
from models.role import Role
from models.branch import Branch

logger = logging.getLogger(__name__)

ROLES = [
    {"role_id": 1, "role_name": "ADMIN"},
    {"role_id": 2, "role_name": "FACULTY"},
]

BRANCHES = [
    {"branch_code": "CSE", "branch_name": "Computer Science and Engineering"},
    {"branch_code": "ECE", "branch_name": "Electronics and Communication Engineering"},
]


def seed_roles():
    created = 0
    for r in ROLES:
        existing = Role.query.filter(
            (Role.role_id == r["role_id"]) |
            (Role.role_name == r["role_name"])
        ).first()

        if not existing:
            db.session.add(
                Role(
                    role_id=r["role_id"],
                    role_name=r["role_name"]
                )
            )
            created += 1

    db.session.commit()
    logger.info("Roles verified (ADMIN=1, FACULTY=2), %d created", created)
    return created


def seed_branches():
    created = 0
    for b in BRANCHES:
        existing = Branch.query.filter_by(branch_code=b["branch_code"]).first()
        if not existing:
            db.session.add(
                Branch(
                    branch_code=b["branch_code"],
                    branch_name=b["branch_name"]
                )
            )
            created += 1

    db.session.commit()
    logger.info("Branches seeded, %d created", created)
    return created


def run_seed():
    return seed_roles() + seed_branches()
