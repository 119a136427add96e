from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from resume_analyzer.core.normalizer import normalize_analysis
from resume_analyzer.db.repositories import NewResume, ResumeRepository

logger = logging.getLogger(__name__)

SAMPLE_RESUMES: list[dict[str, Any]] = [
    {
        "file_name": "john_doe_resume.pdf",
        "file_size": 102400,
        "analysis": {
            "personalInfo": {
                "name": "John Doe",
                "email": "john.doe@example.com",
                "phone": "+1 (555) 123-4567",
                "linkedin": "https://linkedin.com/in/johndoe",
                "portfolio": "https://johndoe.dev",
            },
            "summary": "Experienced software engineer with 5+ years of experience in full-stack development.",
            "workExperience": [
                {
                    "jobTitle": "Senior Software Engineer",
                    "company": "Tech Corp Inc.",
                    "startDate": "2020",
                    "endDate": "Present",
                    "responsibilities": [
                        "Led a team of 5 developers to build a scalable microservices architecture",
                        "Implemented CI/CD pipelines reducing deployment time by 40%",
                        "Mentored junior developers and conducted code reviews",
                    ],
                },
                {
                    "jobTitle": "Software Engineer",
                    "company": "Web Solutions LLC",
                    "startDate": "2018",
                    "endDate": "2020",
                    "responsibilities": [
                        "Developed and maintained RESTful APIs using Node.js and Express",
                        "Optimized database queries resulting in 30% performance improvement",
                    ],
                },
            ],
            "education": [
                {
                    "degree": "Master of Science in Computer Science",
                    "institution": "University of Technology",
                    "graduationYear": "2018",
                },
                {
                    "degree": "Bachelor of Science in Computer Science",
                    "institution": "State University",
                    "graduationYear": "2016",
                },
            ],
            "skills": {
                "technical": ["JavaScript", "Node.js", "React", "PostgreSQL", "Docker", "AWS"],
                "soft": ["Leadership", "Teamwork", "Problem Solving", "Communication"],
            },
            "projects": [
                {
                    "name": "E-commerce Platform",
                    "description": "A full-stack e-commerce platform with payment integration",
                    "technologies": ["React", "Node.js", "MongoDB", "Stripe"],
                    "role": "Lead developer",
                }
            ],
            "certifications": [
                {"name": "AWS Certified Developer", "issuer": "Amazon Web Services"},
                {"name": "Google Cloud Professional", "issuer": "Google"},
            ],
            "analysis": {
                "rating": 8,
                "strengths": ["Clear leadership record", "Quantified delivery impact"],
                "improvementAreas": [
                    "Could include more metrics and quantifiable achievements in work experience."
                ],
                "skillGaps": ["GraphQL", "Kubernetes"],
                "recommendations": [
                    "Learn GraphQL",
                    "Explore serverless architecture",
                    "Improve knowledge of container orchestration with Kubernetes",
                ],
            },
        },
    },
    {
        "file_name": "jane_smith_resume.pdf",
        "file_size": 92160,
        "analysis": {
            "personalInfo": {
                "name": "Jane Smith",
                "email": "jane.smith@example.com",
                "phone": "+1 (555) 987-6543",
                "linkedin": "https://linkedin.com/in/janesmith",
                "portfolio": "https://janesmith.dev",
            },
            "summary": "Frontend developer with 3+ years of experience in React and modern JavaScript frameworks.",
            "workExperience": [
                {
                    "jobTitle": "Frontend Developer",
                    "company": "Digital Creations",
                    "startDate": "2019",
                    "endDate": "Present",
                    "responsibilities": [
                        "Developed responsive web applications using React and Redux",
                        "Optimized application performance, reducing load time by 30%",
                        "Collaborated with UX/UI designers to implement pixel-perfect designs",
                    ],
                }
            ],
            "education": [
                {
                    "degree": "Bachelor of Arts in Interactive Design",
                    "institution": "Creative Arts College",
                    "graduationYear": "2019",
                }
            ],
            "skills": {
                "technical": ["JavaScript", "TypeScript", "React", "Redux", "CSS", "Jest"],
                "soft": ["Attention to Detail", "Collaboration", "Creativity"],
            },
            "projects": [],
            "certifications": [],
            "analysis": {
                "rating": 7,
                "strengths": ["Strong frontend focus", "Performance work backed by numbers"],
                "improvementAreas": [
                    "Add a projects section that shows end-to-end ownership.",
                    "Mention accessibility experience explicitly.",
                ],
                "skillGaps": ["Server-side rendering", "Accessibility auditing"],
                "recommendations": ["Learn Next.js", "Study WCAG 2.2", "Contribute to open source UI libraries"],
            },
        },
    },
    {
        "file_name": "alex_chen_resume.pdf",
        "file_size": 81920,
        "analysis": {
            "personalInfo": {
                "name": "Alex Chen",
                "email": "alex.chen@example.com",
                "phone": "+1 (555) 246-8101",
            },
            "summary": "Data engineer building batch and streaming pipelines on cloud platforms.",
            "workExperience": [
                {
                    "jobTitle": "Data Engineer",
                    "company": "Insight Analytics",
                    "startDate": "2021",
                    "endDate": "Present",
                    "responsibilities": [
                        "Built Airflow pipelines ingesting 2TB of event data per day",
                        "Moved nightly reporting from cron scripts to dbt models",
                    ],
                }
            ],
            "education": [
                {
                    "degree": "BSc Statistics",
                    "institution": "Pacific University",
                    "graduationYear": "2021",
                    "achievements": ["Dean's list"],
                }
            ],
            "skills": {
                "technical": ["Python", "SQL", "Airflow", "dbt", "Spark"],
                "soft": ["Communication"],
            },
            "certifications": [
                {"name": "Google Professional Data Engineer", "issuer": "Google", "dateObtained": "2023"}
            ],
            "analysis": {
                "rating": 6,
                "strengths": ["Modern data stack"],
                "improvementAreas": ["Summary is generic.", "No links to public work."],
                "skillGaps": ["Streaming (Kafka/Flink)"],
                "recommendations": ["Build a public streaming demo", "Add a portfolio link"],
            },
        },
    },
]


def seed_sample_resumes(session: Session) -> int:
    """Insert the bundled sample analyses that are not already present.

    All inserts happen in a single transaction.
    """
    repo = ResumeRepository(session)
    pending = [
        NewResume(
            analysis=normalize_analysis(sample["analysis"]),
            file_name=sample["file_name"],
            file_size=sample["file_size"],
        )
        for sample in SAMPLE_RESUMES
        if not repo.exists_by_file_name(sample["file_name"])
    ]
    if not pending:
        logger.info("Sample resumes already present; nothing to seed")
        return 0

    repo.create_many(pending)
    logger.info("Seeded %d sample resumes", len(pending))
    return len(pending)
