"""
Recommendation Service
Suggested follow-up actions for an assessed entity
"""

from typing import List

from riskengine.models.schemas import Assessment, RiskTier

def generate_recommendations(assessment: Assessment) -> List[str]:
    tier = assessment.risk_tier
    score = assessment.combined_score

    if tier == RiskTier.CRITICAL or score >= 40:
        return [
            "Immediately lock account and investigate",
            "Enable multi-factor authentication",
            "Review all recent activities",
            "Contact security team immediately"
        ]
    if tier == RiskTier.HIGH or score >= 30:
        return [
            "Enable additional authentication",
            "Monitor account closely",
            "Review access permissions",
            "Implement session timeout"
        ]
    if tier == RiskTier.MEDIUM or score >= 20:
        return [
            "Review login patterns",
            "Enable account monitoring",
            "Update security policies"
        ]
    return [
        "Continue normal monitoring",
        "Regular security training"
    ]
