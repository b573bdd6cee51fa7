#!/usr/bin/env python
"""Idempotent seed script for preset roles & the initial admin user.

Usage:
    python backend/scripts/seed_authz.py               # seed normally
    python backend/scripts/seed_authz.py --show-roles  # print role -> permission counts (after ensuring seed)
    python backend/scripts/seed_authz.py --dry-run     # run logic then rollback (no DB changes)
    python backend/scripts/seed_authz.py --export-json roles.json
"""
from __future__ import annotations
import os, sys, argparse, textwrap, json

# Allow running from repo root
sys.path.append(os.path.abspath('backend'))

from salesops import create_app, get_db  # type: ignore
from salesops.models import create_schema
from salesops.services.stores import SqlAuthzStore
from salesops.services.seed import ensure_role_presets, ensure_initial_admin, summarize_roles, build_role_permission_map


def print_role_summary(store):
    rows = summarize_roles(store)
    if not rows:
        print("[INFO] No roles present.")
        return
    name_w = max(len(r[0]) for r in rows)
    print(f"{'Role'.ljust(name_w)} | Count | Sample (up to 8)")
    print('-' * (name_w + 40))
    for name, cnt, sample in rows:
        print(f"{name.ljust(name_w)} | {str(cnt).rjust(5)} | {', '.join(sample)}")


def parse_args():
    p = argparse.ArgumentParser(
        description="Seed RBAC preset roles & initial admin",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""Examples:\n  seed normally: seed_authz.py\n  dry run: seed_authz.py --dry-run\n  show roles: seed_authz.py --show-roles\n""")
    )
    p.add_argument('--show-roles', action='store_true', help='Print role permission counts after seeding')
    p.add_argument('--dry-run', action='store_true', help='Rollback after operations (no commit)')
    p.add_argument('--export-json', nargs='?', const='-', metavar='FILE', help='Export role->permissions JSON (to FILE or stdout if omitted)')
    return p.parse_args()


def main():
    args = parse_args()
    app = create_app()
    with app.app_context():
        session = get_db()
        create_schema(session.get_bind())
        store = SqlAuthzStore(session)
        try:
            created_r = ensure_role_presets(store)
            _, created_admin = ensure_initial_admin(
                session,
                store,
                os.getenv('SEED_ADMIN_EMAIL', 'admin@example.com'),
                os.getenv('SEED_ADMIN_PASSWORD', 'ChangeMe123!'),
            )
            if created_admin:
                print("[INFO] Created initial admin user with temporary password.")
            if args.dry_run:
                session.rollback()
                print(f"[DRY-RUN] (rolled back) Roles would create: {created_r}")
            else:
                session.commit()
                print(f"[DONE] Roles created: {created_r}")
            if args.show_roles:
                print('\nRole Permission Summary:')
                print_role_summary(store)
            if args.export_json is not None:
                payload = {'roles': build_role_permission_map(store)}
                if args.export_json == '-':
                    print(json.dumps(payload, indent=2, sort_keys=True))
                else:
                    with open(args.export_json, 'w', encoding='utf-8') as f:
                        json.dump(payload, f, indent=2, sort_keys=True)
                    print(f"[INFO] Exported JSON to {args.export_json}")
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


if __name__ == '__main__':
    main()
