"""Bundled example definitions."""

from __future__ import annotations

from typing import Any

from .model import Definition
from .schema import parse_definition

PURCHASE_ORDER_APPROVAL: dict[str, Any] = {
    "id": "sample-po-approval",
    "name": "Purchase Order Approval",
    "description": (
        "Standard purchase order workflow with approval routing based on amount thresholds."
    ),
    "nodes": [
        {"id": "start-1", "type": "start", "data": {"label": "Start", "description": "PO process begins"}},
        {
            "id": "status-draft",
            "type": "status",
            "data": {"label": "Draft", "description": "PO is being drafted", "slaHours": 24},
        },
        {
            "id": "status-review",
            "type": "status",
            "data": {
                "label": "Review",
                "description": "PO under review",
                "slaHours": 8,
                "notifications": {
                    "onEnter": {
                        "enabled": True,
                        "channels": ["email"],
                        "template": "PO {objectName} is ready for review. Please check the details.",
                        "recipient": "assignee",
                    }
                },
            },
        },
        {
            "id": "decision-amount",
            "type": "decision",
            "data": {"label": "Amount > $1000?", "description": "Route based on PO amount"},
        },
        {
            "id": "status-mgr-approval",
            "type": "status",
            "data": {
                "label": "Manager Approval",
                "description": "Awaiting manager sign-off",
                "slaHours": 48,
                "notifications": {
                    "onEnter": {
                        "enabled": True,
                        "channels": ["email", "sms"],
                        "template": "PO {objectName} requires your approval (>$1000). Action: {action}",
                        "recipient": "admin",
                    }
                },
            },
        },
        {
            "id": "decision-approved",
            "type": "decision",
            "data": {"label": "Approved?", "description": "Manager decision"},
        },
        {
            "id": "status-auto-approve",
            "type": "status",
            "data": {
                "label": "Auto-Approve",
                "description": "Automatically approved (under threshold)",
                "slaHours": 1,
            },
        },
        {
            "id": "status-procurement",
            "type": "status",
            "data": {
                "label": "Procurement",
                "description": "Order placed with vendor",
                "slaHours": 72,
                "notifications": {
                    "onEnter": {
                        "enabled": True,
                        "channels": ["email"],
                        "template": "PO {objectName} approved and sent to procurement.",
                        "recipient": "owner",
                    }
                },
            },
        },
        {
            "id": "status-delivery",
            "type": "status",
            "data": {"label": "Delivery", "description": "Awaiting delivery", "slaHours": 168},
        },
        {"id": "end-completed", "type": "end", "data": {"label": "Completed", "description": "PO fulfilled"}},
        {"id": "end-rejected", "type": "end", "data": {"label": "Rejected", "description": "PO was rejected"}},
    ],
    "edges": [
        {
            "id": "e-start-draft",
            "source": "start-1",
            "target": "status-draft",
            "data": {
                "label": "Create PO",
                "description": "Initialize purchase order",
                "requiredFields": ["PO Number", "Vendor", "Amount"],
            },
        },
        {
            "id": "e-draft-review",
            "source": "status-draft",
            "target": "status-review",
            "data": {
                "label": "Submit",
                "description": "Submit for review",
                "requiredFields": ["Justification"],
            },
        },
        {
            "id": "e-review-decision",
            "source": "status-review",
            "target": "decision-amount",
            "data": {"label": "Evaluate", "description": "Check PO amount"},
        },
        {
            "id": "e-over1k",
            "source": "decision-amount",
            "target": "status-mgr-approval",
            "data": {"label": "Yes (>$1000)", "description": "Requires manager approval"},
        },
        {
            "id": "e-under1k",
            "source": "decision-amount",
            "target": "status-auto-approve",
            "data": {"label": "No (<=$1000)", "description": "Auto-approved"},
        },
        {
            "id": "e-mgr-decide",
            "source": "status-mgr-approval",
            "target": "decision-approved",
            "data": {"label": "Review", "description": "Manager reviews"},
        },
        {
            "id": "e-approved",
            "source": "decision-approved",
            "target": "status-procurement",
            "data": {
                "label": "Approve",
                "description": "Manager approves",
                "requiredRoles": ["Admin", "Manager"],
                "requiredFields": ["Approval Notes"],
            },
        },
        {
            "id": "e-rejected",
            "source": "decision-approved",
            "target": "end-rejected",
            "data": {
                "label": "Reject",
                "description": "Manager rejects",
                "requiredRoles": ["Admin", "Manager"],
                "requiredFields": ["Rejection Reason"],
            },
        },
        {
            "id": "e-auto-procurement",
            "source": "status-auto-approve",
            "target": "status-procurement",
            "data": {"label": "Process", "description": "Send to procurement"},
        },
        {
            "id": "e-procurement-delivery",
            "source": "status-procurement",
            "target": "status-delivery",
            "data": {
                "label": "Order Placed",
                "description": "Vendor order confirmed",
                "requiredFields": ["Order Reference"],
            },
        },
        {
            "id": "e-delivery-complete",
            "source": "status-delivery",
            "target": "end-completed",
            "data": {
                "label": "Received",
                "description": "Goods received",
                "requiredFields": ["Received By", "Condition"],
                "requiredDocuments": [
                    {"name": "Delivery Note", "type": "pdf", "description": "Signed delivery note"}
                ],
            },
        },
    ],
}


def purchase_order_approval() -> Definition:
    return parse_definition(PURCHASE_ORDER_APPROVAL)
