"""Sample CRM records used by analysis mode."""

import copy
from typing import Any

DATA_SOURCES = {
    "customers": "Customer Information",
    "deals": "Sales Pipeline & Deals",
    "marketing": "Marketing Campaigns",
    "support": "Support Tickets",
    "custom": "Custom Query",
}

CUSTOMERS = [
    {
        "id": 1,
        "name": "Acme Corporation",
        "industry": "Technology",
        "employees": 250,
        "annual_revenue": 5000000,
        "customer_since": "2023-02-15",
        "plan": "Enterprise",
        "mrr": 2500,
        "contacts": [
            {"name": "John Smith", "role": "CTO", "email": "john@acme.com"},
            {"name": "Sarah Jones", "role": "CEO", "email": "sarah@acme.com"},
        ],
        "nps_score": 9,
        "last_interaction": "2025-05-20",
    },
    {
        "id": 2,
        "name": "Global Services Inc",
        "industry": "Professional Services",
        "employees": 120,
        "annual_revenue": 2800000,
        "customer_since": "2024-07-10",
        "plan": "Professional",
        "mrr": 1200,
        "contacts": [
            {"name": "Michael Brown", "role": "Operations Director", "email": "michael@globalservices.com"},
        ],
        "nps_score": 7,
        "last_interaction": "2025-05-28",
    },
    {
        "id": 3,
        "name": "Sunrise Retail",
        "industry": "Retail",
        "employees": 85,
        "annual_revenue": 1500000,
        "customer_since": "2024-11-05",
        "plan": "Professional",
        "mrr": 950,
        "contacts": [
            {"name": "Lisa Chen", "role": "Marketing Manager", "email": "lisa@sunriseretail.com"},
            {"name": "David Wilson", "role": "IT Manager", "email": "david@sunriseretail.com"},
        ],
        "nps_score": 8,
        "last_interaction": "2025-06-01",
    },
    {
        "id": 4,
        "name": "EcoSolutions",
        "industry": "Environmental",
        "employees": 45,
        "annual_revenue": 900000,
        "customer_since": "2023-05-22",
        "plan": "Starter",
        "mrr": 450,
        "contacts": [
            {"name": "Emma Green", "role": "Founder", "email": "emma@ecosolutions.com"},
        ],
        "nps_score": 10,
        "last_interaction": "2025-05-15",
    },
    {
        "id": 5,
        "name": "MediHealth Group",
        "industry": "Healthcare",
        "employees": 320,
        "annual_revenue": 7500000,
        "customer_since": "2022-09-18",
        "plan": "Enterprise",
        "mrr": 3200,
        "contacts": [
            {"name": "Robert Johnson", "role": "CIO", "email": "robert@medihealth.com"},
            {"name": "Amanda Lee", "role": "Operations Director", "email": "amanda@medihealth.com"},
        ],
        "nps_score": 6,
        "last_interaction": "2025-05-10",
    },
]

DEALS = [
    {
        "id": 101,
        "company": "TechNova Solutions",
        "value": 75000,
        "stage": "Proposal",
        "probability": 60,
        "expected_close_date": "2025-07-15",
        "owner": "Alex Martinez",
        "products": ["CRM Pro", "Analytics Add-on"],
        "first_contact_date": "2025-04-10",
        "last_activity": "2025-06-02",
        "next_step": "Follow up on proposal",
    },
    {
        "id": 102,
        "company": "Bright Finance",
        "value": 120000,
        "stage": "Negotiation",
        "probability": 80,
        "expected_close_date": "2025-06-30",
        "owner": "Jessica Wong",
        "products": ["CRM Enterprise", "API Access", "Premium Support"],
        "first_contact_date": "2025-03-05",
        "last_activity": "2025-05-28",
        "next_step": "Schedule contract review",
    },
    {
        "id": 103,
        "company": "GreenField Agriculture",
        "value": 45000,
        "stage": "Discovery",
        "probability": 30,
        "expected_close_date": "2025-08-15",
        "owner": "Marcus Johnson",
        "products": ["CRM Pro"],
        "first_contact_date": "2025-05-20",
        "last_activity": "2025-05-25",
        "next_step": "Product demo",
    },
    {
        "id": 104,
        "company": "Metro Hospitality Group",
        "value": 95000,
        "stage": "Closed Won",
        "probability": 100,
        "expected_close_date": "2025-05-10",
        "owner": "Samantha Lee",
        "products": ["CRM Enterprise", "Workflow Automation"],
        "first_contact_date": "2025-02-15",
        "last_activity": "2025-05-10",
        "next_step": "Implementation kickoff",
    },
    {
        "id": 105,
        "company": "Quantum Research",
        "value": 65000,
        "stage": "Qualification",
        "probability": 20,
        "expected_close_date": "2025-09-01",
        "owner": "Alex Martinez",
        "products": ["CRM Pro", "Data Migration Service"],
        "first_contact_date": "2025-05-28",
        "last_activity": "2025-06-01",
        "next_step": "Technical requirements review",
    },
]

MARKETING = [
    {
        "id": 201,
        "name": "Spring Product Launch",
        "type": "Email",
        "status": "Completed",
        "start_date": "2025-04-01",
        "end_date": "2025-04-15",
        "budget": 5000,
        "spend": 4850,
        "metrics": {
            "emails_sent": 15000,
            "open_rate": 22.5,
            "click_rate": 3.8,
            "conversion_rate": 1.2,
            "revenue_attributed": 28500,
        },
        "target_audience": "Existing Customers",
        "owner": "Marketing Team",
    },
    {
        "id": 202,
        "name": "Summer Webinar Series",
        "type": "Webinar",
        "status": "Active",
        "start_date": "2025-06-01",
        "end_date": "2025-08-31",
        "budget": 12000,
        "spend": 4200,
        "metrics": {
            "registrations": 850,
            "attendance_rate": 65.3,
            "lead_conversion": 8.5,
            "revenue_attributed": 35000,
        },
        "target_audience": "Prospects",
        "owner": "Webinar Team",
    },
    {
        "id": 203,
        "name": "Industry Conference Sponsorship",
        "type": "Event",
        "status": "Planned",
        "start_date": "2025-09-15",
        "end_date": "2025-09-17",
        "budget": 25000,
        "spend": 5000,
        "metrics": {
            "booth_visitors": 0,
            "leads_collected": 0,
            "meetings_scheduled": 0,
            "revenue_attributed": 0,
        },
        "target_audience": "Industry Professionals",
        "owner": "Events Team",
    },
    {
        "id": 204,
        "name": "Q1 PPC Campaign",
        "type": "Paid Search",
        "status": "Completed",
        "start_date": "2025-01-01",
        "end_date": "2025-03-31",
        "budget": 15000,
        "spend": 14950,
        "metrics": {
            "impressions": 250000,
            "clicks": 12500,
            "ctr": 5.0,
            "conversions": 375,
            "cost_per_conversion": 39.87,
            "revenue_attributed": 56250,
        },
        "target_audience": "New Prospects",
        "owner": "Digital Marketing Team",
    },
]

SUPPORT = [
    {
        "id": 301,
        "customer": "Acme Corporation",
        "subject": "Integration with Salesforce not working",
        "status": "Open",
        "priority": "High",
        "created_at": "2025-06-01 09:15:22",
        "updated_at": "2025-06-02 14:30:45",
        "assigned_to": "Technical Support Team",
        "category": "Integration",
        "first_response_time": "00:45:12",
        "resolution_time": None,
        "satisfaction_score": None,
    },
    {
        "id": 302,
        "customer": "Global Services Inc",
        "subject": "Need help setting up email templates",
        "status": "Closed",
        "priority": "Medium",
        "created_at": "2025-05-28 13:22:10",
        "updated_at": "2025-05-29 10:15:33",
        "assigned_to": "Customer Success",
        "category": "Usage Question",
        "first_response_time": "01:12:45",
        "resolution_time": "21:53:23",
        "satisfaction_score": 9,
    },
    {
        "id": 303,
        "customer": "EcoSolutions",
        "subject": "Dashboard showing incorrect data",
        "status": "In Progress",
        "priority": "High",
        "created_at": "2025-05-30 16:05:17",
        "updated_at": "2025-06-02 11:22:40",
        "assigned_to": "Engineering",
        "category": "Bug",
        "first_response_time": "00:32:18",
        "resolution_time": None,
        "satisfaction_score": None,
    },
    {
        "id": 304,
        "customer": "MediHealth Group",
        "subject": "Request for additional user licenses",
        "status": "Closed",
        "priority": "Low",
        "created_at": "2025-05-25 09:45:30",
        "updated_at": "2025-05-25 11:30:22",
        "assigned_to": "Account Management",
        "category": "Billing",
        "first_response_time": "00:55:10",
        "resolution_time": "01:45:52",
        "satisfaction_score": 10,
    },
    {
        "id": 305,
        "customer": "Sunrise Retail",
        "subject": "API rate limit exceeded",
        "status": "Open",
        "priority": "Critical",
        "created_at": "2025-06-02 08:12:45",
        "updated_at": "2025-06-02 08:15:22",
        "assigned_to": "Engineering",
        "category": "API",
        "first_response_time": "00:02:37",
        "resolution_time": None,
        "satisfaction_score": None,
    },
]

_DATASETS = {
    "customers": CUSTOMERS,
    "deals": DEALS,
    "marketing": MARKETING,
    "support": SUPPORT,
}


def get_sample_data(kind: str) -> list[dict[str, Any]] | dict[str, list[dict[str, Any]]]:
    """
    Return sample records for a data source.

    Unknown kinds (including ``custom``) get a mix of the first two records
    of every dataset, keyed by dataset name. Results are deep copies.
    """
    if kind in _DATASETS:
        return copy.deepcopy(_DATASETS[kind])
    return {name: copy.deepcopy(records[:2]) for name, records in _DATASETS.items()}
