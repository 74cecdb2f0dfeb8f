"""Mock statistics/transaction service used by integration and e2e tests"""

from typing import Optional

from fastapi import APIRouter, FastAPI, Header, HTTPException
from fastapi.responses import Response

MOCK_EMAIL = "analyst@bank.test"
MOCK_PASSWORD = "secret"
MOCK_TOKEN = "mock-token-analyst"

USER = {
    "id": 1,
    "email": MOCK_EMAIL,
    "fullName": "Test Analyst",
    "role": "USER",
    "enabled": True,
    "createdAt": "2024-01-01T00:00:00",
    "lastLoginAt": "2024-01-15T09:00:00",
}

TRANSACTIONS = [
    {"id": 1, "transactionId": "TX-001", "customerId": "CUST-100", "recipientId": "R-1", "amount": 1000,
     "transactionDateTime": "2024-01-01T10:00:00", "isFraud": False, "fraudProbability": 0.2,
     "deviceModel": "iPhone 13", "osVersion": "iOS 17"},
    {"id": 2, "transactionId": "TX-002", "customerId": "CUST-100", "recipientId": "R-2", "amount": 5000,
     "transactionDateTime": "2024-01-01T15:30:00", "isFraud": True, "fraudProbability": 0.9,
     "deviceModel": "Galaxy S21", "osVersion": "Android 13"},
    {"id": 3, "transactionId": "TX-003", "customerId": "CUST-200", "recipientId": "R-3", "amount": 250,
     "transactionDateTime": "2024-01-02T08:15:00", "isFraud": False, "fraudProbability": 0.55,
     "deviceModel": "iPhone 13", "osVersion": "iOS 17"},
    {"id": 4, "transactionId": "TX-004", "customerId": "CUST-300", "recipientId": "R-1", "amount": 7500,
     "transactionDateTime": "2024-01-03T21:45:00", "isFraud": True, "fraudProbability": 0.97},
    {"id": 5, "transactionId": "TX-005", "customerId": "CUST-200", "recipientId": "R-4", "amount": 120,
     "transactionDateTime": "2024-01-03T22:00:00", "isFraud": False},
]

DASHBOARD = {
    "totalTransactions": 1000,
    "fraudCount": 130,
    "legitimateCount": 870,
    "fraudRate": 13.0,
    "totalAmount": 2500000.0,
    "fraudAmount": 410000.0,
    "avgTransactionAmount": 2500.0,
    "preventedLosses": 0,
    "blockedCount": 100,
    "reviewCount": 40,
    "approvedCount": 860,
    "modelMetrics": {
        "precision": 0.8, "recall": 0.615, "f1Score": 0.696, "fbetaScore": 0.645, "rocAuc": 0.94,
        "accuracy": 0.93, "truePositives": 80, "falsePositives": 20, "trueNegatives": 850,
        "falseNegatives": 50, "lastUpdated": "2024-01-15T00:00:00",
    },
    "topRiskyCustomers": [
        {"customerId": "CUST-300", "transactionCount": 4, "fraudCount": 2, "fraudRate": 50.0,
         "totalAmount": 15000.0, "avgRiskScore": 88.0, "deviceChanges": 3},
        {"customerId": "CUST-100", "transactionCount": 40, "fraudCount": 2, "fraudRate": 5.0,
         "totalAmount": 52000.0, "avgRiskScore": 41.0, "deviceChanges": 1},
        {"customerId": "CUST-200", "transactionCount": 50, "fraudCount": 0, "fraudRate": 0.0,
         "totalAmount": 8000.0, "avgRiskScore": 12.0},
    ],
    "fraudTrend": [
        {"date": "2024-01-01", "count": 4},
        {"date": "2024-01-02", "count": 0},
        {"date": "2024-01-03", "count": 8},
    ],
    "amountTrend": [
        {"date": "2024-01-01", "amount": 60000.0},
        {"date": "2024-01-02", "amount": 25000.0},
        {"date": "2024-01-03", "amount": 120000.0},
    ],
    "behavioralInsights": {
        "avgDeviceChanges": 1.4, "avgOsChanges": 0.6, "suspiciousLoginPatterns": 12,
        "highFrequencyUsers": 5, "anomalousSessionPatterns": 3,
    },
}

CUSTOMERS = {
    "CUST-100": {
        "customerId": "CUST-100",
        "totalTransactions": 40,
        "fraudTransactions": 2,
        "totalAmount": 52000.0,
        "avgAmount": 1300.0,
        "deviceChanges": 1,
        "osVersionChanges": 1,
        "loginsLast7Days": 9,
        "loginsLast30Days": 20,
        "loginFrequencyChange": 0.8,
        "latestPhoneModel": "Galaxy S21",
        "latestOsVersion": "Android 13",
        "transactionTimeline": [
            {"transactionId": 2, "transactionDate": "2024-01-01T15:30:00", "amount": 5000, "isFraud": True,
             "recipientId": "R-2", "riskScore": 90, "decision": "BLOCK"},
            {"transactionId": 1, "transactionDate": "2024-01-01T10:00:00", "amount": 1000, "isFraud": False,
             "recipientId": "R-1", "riskScore": 20, "decision": "APPROVE"},
        ],
        "amountTimeline": [
            {"date": "2024-01-01", "amount": 6000, "isFraud": True, "transactionCount": 2},
        ],
        "deviceUsage": [
            {"deviceModel": "iPhone 13", "osVersion": "iOS 17", "usageCount": 30, "lastUsed": "2024-01-01"},
            {"deviceModel": "Galaxy S21", "osVersion": "Android 13", "usageCount": 10, "lastUsed": "2024-01-01"},
        ],
        "riskProfile": {
            "overallRiskLevel": "HIGH",
            "riskScore": 41.0,
            "mainRiskFactors": ["New device"],
            "behavioralAnomalies": ["Login burst"],
            "recommendations": ["Verify by phone"],
        },
    },
}

FEATURES = [
    {"featureName": "amount", "importance": 0.31, "category": "transaction", "description": "Amount"},
    {"featureName": "device_changes", "importance": 0.42, "category": "device", "description": "Devices"},
    {"featureName": "hour", "importance": 0.12, "category": "temporal", "description": "Hour of day"},
]


def envelope(data, message: str = "OK"):
    return {"success": True, "message": message, "data": data}


def decision_for(probability: float) -> str:
    return "BLOCK" if probability >= 0.85 else "REVIEW" if probability >= 0.5 else "APPROVE"


def check_token(authorization: Optional[str]) -> None:
    if authorization != f"Bearer {MOCK_TOKEN}":
        raise HTTPException(status_code=401, detail="invalid token")


router = APIRouter(prefix="/api")


@router.post("/auth/login")
def login(body: dict):
    if body.get("email") != MOCK_EMAIL or body.get("password") != MOCK_PASSWORD:
        raise HTTPException(status_code=401, detail="bad credentials")
    return {"accessToken": MOCK_TOKEN, "tokenType": "Bearer", "user": USER, "expiresIn": 3600}


@router.post("/auth/logout")
def logout(authorization: Optional[str] = Header(None)):
    check_token(authorization)
    return envelope(None)


@router.get("/auth/me")
def me(authorization: Optional[str] = Header(None)):
    check_token(authorization)
    return MOCK_EMAIL


@router.get("/statistics/dashboard")
def dashboard(authorization: Optional[str] = Header(None)):
    check_token(authorization)
    return envelope(DASHBOARD)


@router.get("/statistics/customer/{customer_id}")
def customer(customer_id: str, authorization: Optional[str] = Header(None)):
    check_token(authorization)
    if customer_id not in CUSTOMERS:
        raise HTTPException(status_code=404, detail="customer not found")
    return envelope(CUSTOMERS[customer_id])


@router.get("/statistics/model-metrics")
def model_metrics(authorization: Optional[str] = Header(None)):
    check_token(authorization)
    return envelope(DASHBOARD["modelMetrics"])


@router.get("/statistics/feature-importance")
def feature_importance(authorization: Optional[str] = Header(None)):
    check_token(authorization)
    return envelope(FEATURES)


@router.get("/statistics/behavioral-insights")
def behavioral_insights(authorization: Optional[str] = Header(None)):
    check_token(authorization)
    return envelope(DASHBOARD["behavioralInsights"])


@router.post("/statistics/transactions/filter")
def filter_transactions(body: dict, authorization: Optional[str] = Header(None)):
    check_token(authorization)
    status = body.get("fraudStatus", "all")
    decision = body.get("decision")
    selected = [
        t for t in TRANSACTIONS
        if (status == "all" or (status == "fraud") == t["isFraud"])
        and (decision is None or decision_for(t.get("fraudProbability") or 0.0) == decision)
        and t["amount"] >= body.get("minAmount", 0)
        and t["amount"] <= body.get("maxAmount", float("inf"))
    ]
    return envelope({
        "transactions": selected,
        "total": len(selected),
        "fraudCount": sum(1 for t in selected if t["isFraud"]),
        "totalAmount": float(sum(t["amount"] for t in selected)),
        "avgRiskScore": 0.0,
    })


@router.get("/statistics/export")
def export(format: str, authorization: Optional[str] = Header(None)):
    check_token(authorization)
    if format not in ("pdf", "excel"):
        raise HTTPException(status_code=400, detail="unsupported format")
    return Response(content=f"%{format.upper()}-report".encode(), media_type="application/octet-stream")


@router.get("/transactions")
def transactions(page: int = 0, size: int = 50, authorization: Optional[str] = Header(None)):
    check_token(authorization)
    start = page * size
    return envelope(TRANSACTIONS[start:start + size])


@router.get("/transactions/fraudulent")
def fraudulent(authorization: Optional[str] = Header(None)):
    check_token(authorization)
    return envelope([t for t in TRANSACTIONS if t["isFraud"]])


@router.post("/transactions/{transaction_id}/analyze")
def analyze(transaction_id: int, authorization: Optional[str] = Header(None)):
    check_token(authorization)
    match = next((t for t in TRANSACTIONS if t["id"] == transaction_id), None)
    if match is None:
        raise HTTPException(status_code=404, detail="transaction not found")
    probability = match.get("fraudProbability") or 0.0
    return envelope({
        "transactionId": match["id"],
        "customerId": match["customerId"],
        "fraudProbability": probability,
        "isFraud": match["isFraud"],
        "decision": decision_for(probability),
        "riskScore": probability * 100,
        "riskFactors": [{"name": "amount", "description": "Large amount", "score": 0.7, "weight": 0.4}],
        "aiExplanation": "Mock explanation",
        "recommendations": "Mock recommendation",
        "analyzedAt": "2024-01-15T12:00:00",
    })


app = FastAPI(title="Mock Statistics Server", version="1.0.0")


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(router)
