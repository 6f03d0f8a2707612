#!/usr/bin/env python3
"""
Bring every donor's last donation date up to their latest logged donation.

Run this if donation rows were ever written without the donor update
(for example, data imported straight into the donations table).

Usage: python scripts/reconcile_donation_dates.py
"""
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bloodconnect.database.database import SessionLocal
from bloodconnect.services.portal_store import PortalStore


def reconcile():
    db = SessionLocal()
    try:
        updated = PortalStore(db).reconcile_last_donation_dates()
        if updated:
            print(f"✅ Updated last donation date for {updated} donor(s)")
        else:
            print("✅ All donors already consistent with the donation log")
    except Exception as e:
        print(f"❌ Reconciliation failed: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    reconcile()
