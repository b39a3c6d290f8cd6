"""Canned responses served in demo mode."""

from __future__ import annotations

from shared.contracts.analysis import (
    BusinessResponse,
    ClimateResponse,
    CyberResponse,
    Task,
)

CLIMATE_MOCK = ClimateResponse.model_validate({
    "ok": True,
    "task": "climate_guard",
    "risk_level": "medium",
    "findings": [
        {
            "title": "Vague de chaleur prévue J+3 à J+6",
            "evidence": "Températures maximales atteignant 38°C avec humidité faible",
            "confidence": 0.85,
        },
        {
            "title": "Conditions sèches prolongées",
            "evidence": "Précipitations totales < 5mm sur 10 jours",
            "confidence": 0.9,
        },
    ],
    "recommendations": [
        {
            "action": "Planifier irrigation préventive pour cultures sensibles",
            "impact": "Réduction pertes de rendement de 15-25%",
            "est_saving_usd": 1200,
        },
        {
            "action": "Ajuster horaires de travail (tôt matin/fin journée)",
            "impact": "Réduction risques santé travailleurs, productivité +10%",
            "est_saving_usd": 800,
        },
        {
            "action": "Vérifier systèmes de refroidissement et backup électrique",
            "impact": "Éviter pertes stock périssable",
            "est_saving_usd": 2500,
        },
    ],
    "notes": (
        "Conditions climatiques défavorables nécessitant préparation immédiate. "
        "Prioriser protection des actifs critiques."
    ),
})

BUSINESS_MOCK = BusinessResponse.model_validate({
    "ok": True,
    "task": "business_shield",
    "score": 62,
    "risk_level": "medium",
    "findings": [
        {
            "title": "Dépendance excessive à un fournisseur principal",
            "evidence": "60% des approvisionnements via un seul fournisseur (onTimeRate: 0.75)",
            "confidence": 0.9,
        },
        {
            "title": "Rotation stock sous-optimale",
            "evidence": "Délais moyens de réapprovisionnement: 18 jours, stock actuel: 45 jours",
            "confidence": 0.85,
        },
        {
            "title": "Tendance ventes en baisse",
            "evidence": "Revenus -12% sur les 10 derniers jours vs période précédente",
            "confidence": 0.75,
        },
    ],
    "recommendations": [
        {
            "action": "Diversifier fournisseurs: identifier 2 sources alternatives pour SKU critiques",
            "impact": "Réduction risque rupture de 40%, amélioration négociation prix",
            "est_saving_usd": 3500,
        },
        {
            "action": "Optimiser niveaux de stock: réduire à 30 jours pour produits à rotation rapide",
            "impact": "Libération trésorerie, réduction coûts stockage 25%",
            "est_saving_usd": 2800,
        },
        {
            "action": "Automatiser alertes de réapprovisionnement basées sur seuils dynamiques",
            "impact": "Éviter ruptures stock, réduction temps gestion 30%",
            "est_saving_usd": 1500,
        },
    ],
    "notes": (
        "Score de résilience moyen (62/100). "
        "Priorité: diversification supply chain et optimisation trésorerie."
    ),
})

CYBER_MOCK = CyberResponse.model_validate({
    "ok": True,
    "task": "cyberprotect",
    "actions": [
        {
            "type": "block",
            "reason": "Email de phishing détecté: expéditeur usurpé, urgence artificielle, lien suspect",
            "event_id": "evt_001",
            "classification": "malicious",
        },
        {
            "type": "quarantine",
            "reason": "URL suspecte: domaine récent, HTTPS manquant, redirection multiple",
            "event_id": "evt_002",
            "classification": "suspicious",
        },
        {
            "type": "ignore",
            "reason": "Email légitime: expéditeur vérifié, contenu cohérent",
            "event_id": "evt_003",
            "classification": "safe",
        },
    ],
    "findings": [
        {
            "title": "Tentative de phishing par usurpation d'identité",
            "evidence": (
                "Domaine expéditeur: paypa1.com (typosquatting), "
                "demande urgente de mise à jour compte"
            ),
            "confidence": 0.95,
        },
        {
            "title": "URL potentiellement malveillante",
            "evidence": "Domaine enregistré il y a 3 jours, hébergement suspect, pas de HTTPS",
            "confidence": 0.75,
        },
    ],
    "notes": (
        "2 menaces détectées sur 10 événements analysés. "
        "Recommandation: formation utilisateurs sur phishing."
    ),
})

MOCK_RESPONSES = {
    Task.CLIMATE: CLIMATE_MOCK,
    Task.BUSINESS: BUSINESS_MOCK,
    Task.CYBER: CYBER_MOCK,
}
