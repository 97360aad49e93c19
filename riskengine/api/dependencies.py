"""
API Dependencies
Request-scoped access to the components owned by the application
"""

from fastapi import HTTPException, Request, status

from riskengine.services.risk_assessor import RiskAssessor

def get_assessor(request: Request) -> RiskAssessor:
    assessor = getattr(request.app.state, "assessor", None)
    if assessor is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Risk assessor not initialized"
        )
    return assessor

def get_refresher(request: Request):
    return getattr(request.app.state, "refresher", None)
