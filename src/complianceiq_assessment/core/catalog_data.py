"""Built-in reference catalog.

Contains the 12 production-readiness sections, the three overlay dimensions
(8 therapeutic areas, 8 AI model types, 6 deployment scenarios), 9 personas
with their sub-personas, the persona-to-section visibility table and the
bottleneck resolution playbook.

Every base question opts into every dimension value, so a complete selection
keeps the full base question set. Every section carries one overlay per
dimension value. Overlays without hand-written questions are generated from
per-dimension templates, with points derived from the dimension value:

    therapy      floor(overlay_points * 0.5)
    model        floor(complexity_points * 0.3)
    deployment   floor(complexity_points * 0.4)
"""

import math

from complianceiq_assessment.core.catalog import (
    AIModelType,
    BottleneckResolution,
    CatalogContext,
    ComplexityTier,
    DeploymentScenario,
    Overlay,
    Persona,
    PersonaSectionMapping,
    Section,
    SubPersona,
    TherapeuticArea,
)
from complianceiq_assessment.core.questions import BaseQuestion

_PRODUCTION_BLOCKER = "Production Blocker"

# ---------------------------------------------------------------------------
# Overlay dimensions
# ---------------------------------------------------------------------------

THERAPEUTIC_AREAS: tuple[TherapeuticArea, ...] = (
    TherapeuticArea(
        id="oncology",
        name="Oncology",
        overlay_points=20,
        complexity=ComplexityTier.CRITICAL,
        specific_requirements=("Genomics", "Biomarkers", "Tumor heterogeneity", "Clinical endpoints"),
        regulatory_guidance=(
            "FDA Oncology Center of Excellence",
            "SEER registry validation",
            "Biomarker qualification",
        ),
    ),
    TherapeuticArea(
        id="cardiology",
        name="Cardiology",
        overlay_points=18,
        complexity=ComplexityTier.HIGH,
        specific_requirements=(
            "Cardiovascular endpoints",
            "ECG interpretation",
            "Device integration",
            "Emergency protocols",
        ),
        regulatory_guidance=(
            "AHA/ACC guidelines",
            "FDA Class II device requirements",
            "Cardiac device integration",
        ),
    ),
    TherapeuticArea(
        id="neurology",
        name="Neurology",
        overlay_points=16,
        complexity=ComplexityTier.HIGH,
        specific_requirements=(
            "Cognitive assessment",
            "Brain imaging",
            "Neurological outcomes",
            "Movement disorders",
        ),
        regulatory_guidance=(
            "FDA CNS guidance",
            "Neuropsychological testing standards",
            "Radiology workflow integration",
        ),
    ),
    TherapeuticArea(
        id="rare-disease",
        name="Rare Disease",
        overlay_points=15,
        complexity=ComplexityTier.MEDIUM,
        specific_requirements=(
            "Small populations",
            "Natural history modeling",
            "Patient registries",
            "Specialized protocols",
        ),
        regulatory_guidance=(
            "FDA orphan drug guidance",
            "Rare disease endpoint validation",
            "Patient registry integration",
        ),
    ),
    TherapeuticArea(
        id="infectious-disease",
        name="Infectious Disease",
        overlay_points=12,
        complexity=ComplexityTier.MEDIUM,
        specific_requirements=(
            "Outbreak response",
            "Antimicrobial resistance",
            "Epidemiological modeling",
            "Vaccine development",
        ),
        regulatory_guidance=("WHO guidelines", "CDC protocols", "Antimicrobial stewardship"),
    ),
    TherapeuticArea(
        id="mental-health",
        name="Mental Health",
        overlay_points=14,
        complexity=ComplexityTier.MEDIUM,
        specific_requirements=(
            "Behavioral assessment",
            "Privacy concerns",
            "Cognitive evaluation",
            "Therapy adherence",
        ),
        regulatory_guidance=(
            "HIPAA compliance",
            "Mental health privacy",
            "Behavioral assessment standards",
        ),
    ),
    TherapeuticArea(
        id="pediatrics",
        name="Pediatrics",
        overlay_points=13,
        complexity=ComplexityTier.MEDIUM,
        specific_requirements=(
            "Age-specific considerations",
            "Safety protocols",
            "Dosage adjustments",
            "Parental consent",
        ),
        regulatory_guidance=(
            "Pediatric study requirements",
            "Age-appropriate dosing",
            "Safety monitoring",
        ),
    ),
    TherapeuticArea(
        id="emergency-medicine",
        name="Emergency Medicine",
        overlay_points=17,
        complexity=ComplexityTier.HIGH,
        specific_requirements=(
            "Rapid response",
            "Critical decisions",
            "Emergency protocols",
            "Real-time monitoring",
        ),
        regulatory_guidance=(
            "Emergency care standards",
            "Critical decision protocols",
            "Rapid response requirements",
        ),
    ),
)

AI_MODEL_TYPES: tuple[AIModelType, ...] = (
    AIModelType(
        id="traditional-ml",
        name="Traditional AI/ML",
        complexity_points=8,
        complexity=ComplexityTier.LOW,
        specific_requirements=(
            "Supervised/unsupervised learning",
            "Deterministic outputs",
            "Statistical validation",
        ),
        safety_considerations=("Model explainability", "Bias detection", "Performance monitoring"),
    ),
    AIModelType(
        id="generative-ai",
        name="Generative AI (GenAI)",
        complexity_points=15,
        complexity=ComplexityTier.HIGH,
        specific_requirements=(
            "Large language models",
            "Content generation",
            "Creative AI",
            "Hallucination detection",
        ),
        safety_considerations=(
            "Content validation",
            "Misinformation prevention",
            "Citation tracking",
            "Quality assurance",
        ),
    ),
    AIModelType(
        id="agentic-ai",
        name="Agentic AI",
        complexity_points=20,
        complexity=ComplexityTier.CRITICAL,
        specific_requirements=(
            "Multi-agent systems",
            "Autonomous decision-making",
            "Agent coordination",
            "Human oversight",
        ),
        safety_considerations=(
            "Decision audit trails",
            "Agent behavior monitoring",
            "Safety constraints",
            "Emergency stops",
        ),
    ),
    AIModelType(
        id="computer-vision",
        name="Computer Vision AI",
        complexity_points=12,
        complexity=ComplexityTier.MEDIUM,
        specific_requirements=(
            "Medical imaging",
            "Pathology analysis",
            "Radiology interpretation",
            "Image quality validation",
        ),
        safety_considerations=(
            "Image preprocessing",
            "Quality assessment",
            "Radiologist integration",
            "Uncertainty quantification",
        ),
    ),
    AIModelType(
        id="nlp",
        name="Natural Language Processing",
        complexity_points=10,
        complexity=ComplexityTier.MEDIUM,
        specific_requirements=(
            "Clinical text analysis",
            "Documentation automation",
            "Medical terminology",
            "Language processing",
        ),
        safety_considerations=(
            "Text validation",
            "Medical accuracy",
            "Privacy preservation",
            "Content quality",
        ),
    ),
    AIModelType(
        id="multimodal",
        name="Multimodal AI",
        complexity_points=18,
        complexity=ComplexityTier.HIGH,
        specific_requirements=(
            "Text/image/sensor data",
            "Multi-source integration",
            "Complex validation",
            "Cross-modal analysis",
        ),
        safety_considerations=(
            "Data integration",
            "Validation complexity",
            "Performance monitoring",
            "Error propagation",
        ),
    ),
    AIModelType(
        id="federated-learning",
        name="Federated Learning",
        complexity_points=16,
        complexity=ComplexityTier.HIGH,
        specific_requirements=(
            "Distributed training",
            "Privacy preservation",
            "Multi-institution coordination",
            "Model aggregation",
        ),
        safety_considerations=(
            "Privacy protection",
            "Model security",
            "Data leakage prevention",
            "Federation governance",
        ),
    ),
    AIModelType(
        id="edge-ai",
        name="Edge AI",
        complexity_points=14,
        complexity=ComplexityTier.HIGH,
        specific_requirements=(
            "Point-of-care deployment",
            "Real-time processing",
            "Resource constraints",
            "Local inference",
        ),
        safety_considerations=(
            "Latency requirements",
            "Resource limitations",
            "Offline capabilities",
            "Security constraints",
        ),
    ),
)

DEPLOYMENT_SCENARIOS: tuple[DeploymentScenario, ...] = (
    DeploymentScenario(
        id="clinical-decision-support",
        name="Clinical Decision Support",
        complexity_points=10,
        complexity=ComplexityTier.MEDIUM,
        regulatory_requirements=(
            "Real-time clinical integration",
            "FDA guidance compliance",
            "Clinical workflow validation",
        ),
        operational_considerations=(
            "Real-time inference",
            "Clinical workflow integration",
            "Alert management",
            "User training",
        ),
    ),
    DeploymentScenario(
        id="drug-discovery",
        name="Drug Discovery & Development",
        complexity_points=8,
        complexity=ComplexityTier.LOW,
        regulatory_requirements=("Research environment protocols", "Data validation", "Research ethics"),
        operational_considerations=(
            "Research timelines",
            "Data quality",
            "Collaboration tools",
            "Knowledge management",
        ),
    ),
    DeploymentScenario(
        id="clinical-trials",
        name="Clinical Trial Operations",
        complexity_points=12,
        complexity=ComplexityTier.HIGH,
        regulatory_requirements=("ICH GCP compliance", "Multi-site coordination", "Regulatory reporting"),
        operational_considerations=(
            "Trial design",
            "Patient recruitment",
            "Data collection",
            "Monitoring protocols",
        ),
    ),
    DeploymentScenario(
        id="regulatory-submission",
        name="Regulatory Submission",
        complexity_points=15,
        complexity=ComplexityTier.HIGH,
        regulatory_requirements=("FDA compliance", "Documentation standards", "Evidence generation"),
        operational_considerations=(
            "Document automation",
            "Quality assurance",
            "Submission timelines",
            "Regulatory liaison",
        ),
    ),
    DeploymentScenario(
        id="real-world-evidence",
        name="Real-World Evidence",
        complexity_points=10,
        complexity=ComplexityTier.MEDIUM,
        regulatory_requirements=(
            "Post-market surveillance",
            "Outcome tracking",
            "Real-world data standards",
        ),
        operational_considerations=(
            "Data collection",
            "Outcome measurement",
            "Long-term monitoring",
            "Evidence synthesis",
        ),
    ),
    DeploymentScenario(
        id="commercial-analytics",
        name="Commercial Analytics",
        complexity_points=6,
        complexity=ComplexityTier.LOW,
        regulatory_requirements=(
            "Business intelligence",
            "Market analysis",
            "Competitive intelligence",
        ),
        operational_considerations=(
            "Data analytics",
            "Market research",
            "Business intelligence",
            "Performance tracking",
        ),
    ),
)

_ALL_THERAPY_IDS: tuple[str, ...] = tuple(area.id for area in THERAPEUTIC_AREAS)
_ALL_MODEL_IDS: tuple[str, ...] = tuple(model.id for model in AI_MODEL_TYPES)
_ALL_DEPLOYMENT_IDS: tuple[str, ...] = tuple(scenario.id for scenario in DEPLOYMENT_SCENARIOS)


def _blocker(
    question_id: str,
    text: str,
    points: int,
    evidence: tuple[str, ...],
    roles: tuple[str, ...],
) -> BaseQuestion:
    """Build a production-blocker base question that opts into every dimension value."""
    return BaseQuestion(
        id=question_id,
        text=text,
        points=points,
        is_blocker=True,
        category=_PRODUCTION_BLOCKER,
        evidence_required=evidence,
        responsible_roles=roles,
        therapy_conditions=_ALL_THERAPY_IDS,
        model_conditions=_ALL_MODEL_IDS,
        deployment_conditions=_ALL_DEPLOYMENT_IDS,
    )


# ---------------------------------------------------------------------------
# Overlay templates
# ---------------------------------------------------------------------------

_THERAPY_TEMPLATES: tuple[str, ...] = (
    "Are your AI systems production-validated for {name} endpoints?",
    "Is your {name} data processing production-compliant?",
    "Are your {name} safety protocols production-deployed?",
)
_MODEL_TEMPLATES: tuple[str, ...] = (
    "Are your {name} systems production-ready?",
    "Is your {name} validation production-compliant?",
    "Are your {name} safety controls production-deployed?",
)
_DEPLOYMENT_TEMPLATES: tuple[str, ...] = (
    "Are your systems production-ready for {name}?",
    "Is your {name} validation production-compliant?",
    "Are your {name} safety protocols production-deployed?",
)

_THERAPY_POINT_FACTOR: float = 0.5
_MODEL_POINT_FACTOR: float = 0.3
_DEPLOYMENT_POINT_FACTOR: float = 0.4


def _templated_overlays(
    section_id: str,
    values: tuple[TherapeuticArea | AIModelType | DeploymentScenario, ...],
    templates: tuple[str, ...],
    factor: float,
    authored: dict[str, tuple[int, tuple[str, ...]]] | None = None,
) -> tuple[Overlay, ...]:
    """Build one overlay per dimension value, preferring hand-authored overlays.

    Args:
        section_id: Section the overlays belong to; prefixes overlay ids.
        values: Dimension values in catalog order.
        templates: Question templates with a ``{name}`` placeholder.
        factor: Multiplier applied to the value's points, floored.
        authored: Hand-written (points, question texts) keyed by dimension id.

    Returns:
        Overlays in dimension catalog order.
    """
    authored = authored or {}
    overlays: list[Overlay] = []
    for value in values:
        if value.id in authored:
            points, texts = authored[value.id]
        else:
            points = math.floor(value.points * factor)
            texts = tuple(template.format(name=value.name) for template in templates)
        overlays.append(
            Overlay(
                id=f"{section_id}.{value.id}",
                dimension_id=value.id,
                complexity_points=points,
                question_texts=texts,
            )
        )
    return tuple(overlays)


def _section(
    section_id: str,
    name: str,
    description: str,
    validator: str,
    questions: tuple[BaseQuestion, ...],
    is_critical_blocker: bool = True,
    therapy_authored: dict[str, tuple[int, tuple[str, ...]]] | None = None,
    model_authored: dict[str, tuple[int, tuple[str, ...]]] | None = None,
    deployment_authored: dict[str, tuple[int, tuple[str, ...]]] | None = None,
) -> Section:
    """Assemble a section; the validator string names its default roles joined by ' + '."""
    return Section(
        id=section_id,
        name=name,
        description=description,
        base_points=sum(question.points for question in questions),
        is_critical_blocker=is_critical_blocker,
        default_responsible_roles=tuple(role.strip() for role in validator.split(" + ")),
        questions=questions,
        therapy_overlays=_templated_overlays(
            section_id,
            THERAPEUTIC_AREAS,
            _THERAPY_TEMPLATES,
            _THERAPY_POINT_FACTOR,
            therapy_authored,
        ),
        model_overlays=_templated_overlays(
            section_id,
            AI_MODEL_TYPES,
            _MODEL_TEMPLATES,
            _MODEL_POINT_FACTOR,
            model_authored,
        ),
        deployment_overlays=_templated_overlays(
            section_id,
            DEPLOYMENT_SCENARIOS,
            _DEPLOYMENT_TEMPLATES,
            _DEPLOYMENT_POINT_FACTOR,
            deployment_authored,
        ),
    )


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

SECTIONS: tuple[Section, ...] = (
    _section(
        "regulatory-compliance",
        "Regulatory Compliance Production Configuration",
        "Production-ready for therapy-specific regulatory submissions",
        "Regulatory Affairs Director",
        (
            _blocker(
                "reg-001",
                "Are your existing AI system outputs production-configured and validated for "
                "immediate therapy-specific FDA submission?",
                5,
                ("FDA validation documentation", "Therapy-specific compliance certificates"),
                ("Regulatory Affairs Director", "Quality Assurance Manager"),
            ),
            _blocker(
                "reg-002",
                "Is your current automated regulatory documentation generation "
                "production-configured for your therapeutic area requirements?",
                4,
                ("Automated documentation system", "Therapy-specific templates"),
                ("Regulatory Affairs Director", "Documentation Specialist"),
            ),
            _blocker(
                "reg-003",
                "Is your PCCP (Predetermined Change Control Plan) production-implemented and "
                "FDA-approved for your specific AI model types?",
                5,
                ("PCCP documentation", "FDA approval letters"),
                ("Regulatory Affairs Director", "AI/ML Engineer"),
            ),
        ),
        therapy_authored={
            "oncology": (
                8,
                (
                    "Are your AI outputs production-formatted and validated for FDA Oncology "
                    "Center of Excellence requirements?",
                    "Is your real-world evidence generation production-configured for oncology "
                    "endpoints (OS, PFS, ORR, biomarkers)?",
                ),
            ),
            "cardiology": (
                4,
                (
                    "Are your AI models production-validated for cardiovascular endpoint "
                    "assessment (MACE, mortality reduction)?",
                ),
            ),
        },
        model_authored={
            "generative-ai": (
                3,
                (
                    "Are your hallucination detection systems production-deployed for clinical "
                    "content generation?",
                ),
            ),
            "agentic-ai": (
                4,
                (
                    "Are your agent decision audit trails production-deployed meeting FDA "
                    "transparency requirements?",
                ),
            ),
        },
        deployment_authored={
            "clinical-decision-support": (
                3,
                (
                    "Are your clinical decision support AI systems production-configured for "
                    "real-time regulatory compliance?",
                ),
            ),
        },
    ),
    _section(
        "clinical-validation",
        "Clinical Validation Production Configuration",
        "Production-ready for therapy-appropriate clinical evidence generation",
        "Clinical Development VP",
        (
            _blocker(
                "clin-001",
                "Is your existing data lake production-configured to automatically generate "
                "clinical study reports meeting ICH E3 standards?",
                5,
                ("ICH E3 compliance documentation", "Automated report generation system"),
                ("Clinical Development VP", "Data Engineering Lead"),
            ),
            _blocker(
                "clin-002",
                "Are your AI-generated clinical endpoints production-configured and "
                "automatically formatted for regulatory submissions?",
                4,
                ("Clinical endpoint validation", "Automated formatting system"),
                ("Clinical Development VP", "Regulatory Affairs Manager"),
            ),
            _blocker(
                "clin-003",
                "Is your external validation system production-deployed across multiple "
                "geographic regions and clinical sites?",
                4,
                ("Multi-site validation documentation", "Geographic deployment certificates"),
                ("Clinical Operations Director", "Global Clinical Manager"),
            ),
        ),
    ),
    _section(
        "safety-bias",
        "Safety & Bias Production Configuration",
        "Production-ready for therapy-specific risks and populations",
        "Data Science/AI Head + Pharmacovigilance Director",
        (
            _blocker(
                "safety-001",
                "Are your existing bias detection algorithms production-configured for "
                "therapy-specific demographic considerations?",
                5,
                ("Bias detection system documentation", "Demographic validation protocols"),
                ("Data Science/AI Head", "Pharmacovigilance Director"),
            ),
            _blocker(
                "safety-002",
                "Is your current safety monitoring system production-configured for "
                "therapy-specific adverse events?",
                4,
                ("Safety monitoring system", "Therapy-specific AE protocols"),
                ("Pharmacovigilance Director", "Clinical Safety Manager"),
            ),
        ),
    ),
    _section(
        "human-in-loop",
        "Human-in-the-Loop Production Configuration",
        "Production-ready for clinical decision support without replacing human judgment",
        "Medical Affairs VP + Clinical Operations Director",
        (
            _blocker(
                "human-001",
                "Are your existing human override capabilities production-configured and "
                "extensively tested across all AI system components?",
                5,
                ("Human override system documentation", "Extensive testing reports"),
                ("Medical Affairs VP", "Clinical Operations Director"),
            ),
        ),
    ),
    _section(
        "explainable-ai",
        "Explainable AI Production Configuration",
        "Production-ready for clinical trust and regulatory compliance",
        "Medical Affairs VP + Data Science/AI Head",
        (
            _blocker(
                "explain-001",
                "Is your decision pathway documentation production-configured for all AI "
                "recommendations?",
                5,
                ("Decision pathway documentation system", "AI recommendation tracking"),
                ("Medical Affairs VP", "Data Science/AI Head"),
            ),
        ),
    ),
    _section(
        "technical-infrastructure",
        "Technical Infrastructure Production Configuration",
        "Production-ready for scalable, secure AI deployment",
        "Chief Technology Officer + IT Infrastructure Head",
        (
            _blocker(
                "tech-001",
                "Are your existing real-time data pipelines production-configured for "
                "continuous clinical streams?",
                5,
                ("Real-time data pipeline documentation", "Clinical stream processing validation"),
                ("Chief Technology Officer", "IT Infrastructure Head"),
            ),
        ),
    ),
    _section(
        "organizational-readiness",
        "Organizational Production Readiness",
        "Production-ready for AI deployment across therapeutic areas",
        "Program Director + Executive Sponsor",
        (
            _blocker(
                "org-001",
                "Is your multidisciplinary team production-configured with support "
                "capabilities for your therapeutic area?",
                4,
                ("Team configuration documentation", "Therapy-specific support capabilities"),
                ("Program Director", "Executive Sponsor"),
            ),
        ),
        is_critical_blocker=False,
    ),
    _section(
        "data-observability",
        "Data Observability Production Configuration",
        "Production-ready for continuous AI monitoring",
        "Data Science/AI Head + Data Engineering Lead",
        (
            _blocker(
                "obs-001",
                "Is your synthetic data generation production-configured for model enhancement?",
                4,
                ("Synthetic data generation system", "Model enhancement protocols"),
                ("Data Science/AI Head", "Data Engineering Lead"),
            ),
        ),
    ),
    _section(
        "data-rights-licensing",
        "Data Rights & Licensing Production Compliance",
        "Production-validated for immediate AI deployment",
        "Legal Counsel - IP Specialist + Regulatory Affairs Director",
        (
            _blocker(
                "rights-001",
                "Are your existing 3rd party data agreements production-validated to explicitly "
                "permit AI model training for your specific therapeutic applications?",
                5,
                ("Third-party data agreements", "AI training permissions documentation"),
                ("Legal Counsel - IP Specialist", "Regulatory Affairs Director"),
            ),
        ),
    ),
    _section(
        "data-classification",
        "Automated Data Classification Production Configuration",
        "Production-ready for therapy-specific compliance",
        "Data Architecture Lead + Privacy Officer",
        (
            _blocker(
                "class-001",
                "Is your existing automated data classification engine production-configured "
                "across all data sources for your therapeutic area?",
                4,
                ("Automated classification engine", "Therapy-specific configuration documentation"),
                ("Data Architecture Lead", "Privacy Officer"),
            ),
        ),
    ),
    _section(
        "ai-output-storage",
        "AI Output Storage Production Configuration",
        "Production-ready for regulatory compliance and audit",
        "Data Architecture Lead + Regulatory Affairs Director",
        (
            _blocker(
                "storage-001",
                "Is your comprehensive AI output storage production-configured for all your "
                "production models?",
                4,
                ("AI output storage system", "Production model coverage documentation"),
                ("Data Architecture Lead", "Regulatory Affairs Director"),
            ),
        ),
    ),
    _section(
        "ai-system-operations",
        "AI System Operations Production Configuration",
        "Production-ready for continuous deployment and monitoring",
        "Data Science/AI Head + DevOps Lead",
        (
            _blocker(
                "ops-001",
                "Is your comprehensive model versioning production-configured across all AI "
                "components?",
                5,
                ("Model versioning system", "AI component coverage documentation"),
                ("Data Science/AI Head", "DevOps Lead"),
            ),
        ),
    ),
)

# ---------------------------------------------------------------------------
# Personas
# ---------------------------------------------------------------------------


def _persona(
    persona_id: str,
    name: str,
    description: str,
    subs: tuple[tuple[str, str, str], ...],
    is_admin: bool = False,
) -> Persona:
    return Persona(
        id=persona_id,
        name=name,
        description=description,
        is_admin=is_admin,
        sub_personas=tuple(
            SubPersona(id=sub_id, persona_id=persona_id, name=sub_name, expertise_level=level)
            for sub_id, sub_name, level in subs
        ),
    )


PERSONAS: tuple[Persona, ...] = (
    _persona(
        "admin",
        "System Administrator",
        "Full system access and comprehensive assessment",
        (("admin-full", "Full Admin Access", "expert"),),
        is_admin=True,
    ),
    _persona(
        "executive",
        "Executive Leadership",
        "Strategic oversight and decision making",
        (
            ("ceo", "Chief Executive Officer", "expert"),
            ("cto", "Chief Technology Officer", "expert"),
            ("vp-strategy", "VP Strategy", "intermediate"),
        ),
    ),
    _persona(
        "data-science",
        "Data Science & AI Team",
        "AI/ML model development and validation",
        (
            ("data-head", "Data Science Head", "expert"),
            ("ml-engineer", "ML Engineer", "intermediate"),
            ("ai-researcher", "AI Researcher", "expert"),
        ),
    ),
    _persona(
        "regulatory",
        "Regulatory Affairs",
        "Regulatory compliance and submissions",
        (
            ("regulatory-director", "Regulatory Affairs Director", "expert"),
            ("international-specialist", "International Regulatory Specialist", "intermediate"),
            ("compliance-officer", "Compliance Officer", "intermediate"),
        ),
    ),
    _persona(
        "quality",
        "Quality Assurance & Risk",
        "Quality systems and risk management",
        (
            ("qa-director", "Quality Assurance Director", "expert"),
            ("risk-management", "Risk Management Specialist", "intermediate"),
            ("audit-specialist", "Audit Specialist", "intermediate"),
        ),
    ),
    _persona(
        "legal",
        "Legal & Privacy",
        "Legal compliance and privacy protection",
        (
            ("legal-counsel", "Legal Counsel", "expert"),
            ("privacy-officer", "Privacy Officer", "intermediate"),
            ("compliance-legal", "Compliance Legal Specialist", "intermediate"),
        ),
    ),
    _persona(
        "clinical",
        "Clinical Operations",
        "Clinical trial operations and safety",
        (
            ("clinical-director", "Clinical Operations Director", "expert"),
            ("medical-affairs", "Medical Affairs Specialist", "intermediate"),
            ("safety-officer", "Safety Officer", "intermediate"),
        ),
    ),
    _persona(
        "data-gov",
        "Data & IT Governance",
        "Data governance and IT security",
        (
            ("chief-data-officer", "Chief Data Officer", "expert"),
            ("data-governance", "Data Governance Specialist", "intermediate"),
            ("it-security", "IT Security Specialist", "intermediate"),
        ),
    ),
    _persona(
        "technical",
        "Technical Operations",
        "Technical implementation and operations",
        (
            ("system-integration", "System Integration Specialist", "intermediate"),
            ("technical-writer", "Technical Writer", "basic"),
            ("devops", "DevOps Engineer", "intermediate"),
        ),
    ),
)

# (persona_id, sub_persona_id or None for persona-wide, section_id, priority_score)
_MAPPING_ROWS: tuple[tuple[str, str | None, str, int], ...] = (
    ("executive", None, "regulatory-compliance", 3),
    ("executive", None, "organizational-readiness", 3),
    ("executive", None, "data-rights-licensing", 2),
    ("executive", "cto", "technical-infrastructure", 3),
    ("executive", "cto", "ai-system-operations", 2),
    ("data-science", None, "safety-bias", 3),
    ("data-science", None, "explainable-ai", 3),
    ("data-science", None, "technical-infrastructure", 2),
    ("data-science", None, "data-observability", 3),
    ("data-science", None, "ai-system-operations", 3),
    ("data-science", "ml-engineer", "ai-output-storage", 2),
    ("regulatory", None, "regulatory-compliance", 3),
    ("regulatory", None, "clinical-validation", 3),
    ("regulatory", None, "data-rights-licensing", 2),
    ("regulatory", "compliance-officer", "data-classification", 2),
    ("quality", None, "clinical-validation", 2),
    ("quality", None, "safety-bias", 3),
    ("quality", None, "ai-output-storage", 2),
    ("quality", "risk-management", "human-in-loop", 3),
    ("quality", "audit-specialist", "explainable-ai", 2),
    ("legal", None, "data-rights-licensing", 3),
    ("legal", None, "data-classification", 3),
    ("legal", "privacy-officer", "ai-output-storage", 2),
    ("clinical", None, "clinical-validation", 3),
    ("clinical", None, "safety-bias", 3),
    ("clinical", None, "human-in-loop", 3),
    ("clinical", "medical-affairs", "explainable-ai", 2),
    ("data-gov", None, "data-classification", 3),
    ("data-gov", None, "data-observability", 2),
    ("data-gov", None, "ai-output-storage", 3),
    ("data-gov", None, "data-rights-licensing", 2),
    ("data-gov", "it-security", "technical-infrastructure", 3),
    ("technical", None, "technical-infrastructure", 3),
    ("technical", None, "ai-system-operations", 3),
    ("technical", "devops", "data-observability", 2),
    ("technical", "technical-writer", "explainable-ai", 1),
)

PERSONA_MAPPINGS: tuple[PersonaSectionMapping, ...] = tuple(
    PersonaSectionMapping(
        persona_id=persona_id,
        sub_persona_id=sub_persona_id,
        section_id=section_id,
        is_required=priority >= 2,
        priority_score=priority,
    )
    for persona_id, sub_persona_id, section_id, priority in _MAPPING_ROWS
)

# ---------------------------------------------------------------------------
# Bottleneck resolutions
# ---------------------------------------------------------------------------

BOTTLENECK_RESOLUTIONS: dict[str, tuple[BottleneckResolution, ...]] = {
    "oncology": (
        BottleneckResolution(
            bottleneck="Genomic data integration complexity",
            resolution="Federated genomic learning with synthetic augmentation",
            priority="High",
            implementation=(
                "Deploy federated learning framework with synthetic data generation "
                "for rare genomic variants"
            ),
        ),
        BottleneckResolution(
            bottleneck="Tumor heterogeneity bias across populations",
            resolution="Population-specific model ensembles",
            priority="Critical",
            implementation=(
                "Implement ensemble models trained on population-specific cohorts "
                "with bias correction"
            ),
        ),
    ),
    "cardiology": (
        BottleneckResolution(
            bottleneck="ECG interpretation accuracy across demographics",
            resolution="Diverse population federated training",
            priority="High",
            implementation=(
                "Deploy federated learning across diverse populations with "
                "demographic-specific validation"
            ),
        ),
    ),
    "generative-ai": (
        BottleneckResolution(
            bottleneck="Clinical misinformation generation",
            resolution="Medical knowledge base grounding with real-time validation",
            priority="Critical",
            implementation=(
                "Integrate medical knowledge bases with real-time content validation "
                "and citation tracking"
            ),
        ),
    ),
    "agentic-ai": (
        BottleneckResolution(
            bottleneck="Multi-agent coordination complexity",
            resolution="Hierarchical agent architecture with clear role definition",
            priority="High",
            implementation=(
                "Implement hierarchical agent system with defined roles, responsibilities, "
                "and communication protocols"
            ),
        ),
    ),
}


def build_default_catalog() -> CatalogContext:
    """Return the built-in catalog as an immutable CatalogContext."""
    return CatalogContext(
        sections=SECTIONS,
        personas=PERSONAS,
        therapeutic_areas=THERAPEUTIC_AREAS,
        ai_model_types=AI_MODEL_TYPES,
        deployment_scenarios=DEPLOYMENT_SCENARIOS,
        persona_mappings=PERSONA_MAPPINGS,
        bottleneck_resolutions=BOTTLENECK_RESOLUTIONS,
    )
