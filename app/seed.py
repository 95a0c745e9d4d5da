"""
Demo data loader

Usage: python -m app.seed
Clears users, assessments, results, modules and progress, then loads demo content.
"""
import logging

from sqlalchemy.orm import Session

from app.database import SessionLocal, init_db
from app.models import (
    User,
    Assessment,
    AssessmentResult,
    LearningModule,
    ModuleProgress,
    LiteracyLevel,
    UserRole,
)

logger = logging.getLogger(__name__)


DEMO_USERS = [
    {"email": "student@example.com", "name": "John Student", "role": UserRole.STUDENT,
     "literacy_level": LiteracyLevel.SEMI_LITERATE},
    {"email": "teacher@example.com", "name": "Jane Teacher", "role": UserRole.TEACHER,
     "literacy_level": LiteracyLevel.LITERATE},
    {"email": "admin@example.com", "name": "Admin User", "role": UserRole.ADMIN,
     "literacy_level": LiteracyLevel.LITERATE},
]

DEMO_ASSESSMENTS = [
    {
        "title": "Basic Digital Skills",
        "description": "Test your basic digital literacy",
        "skill_category": "basic",
        "total_points": 100.0,
        "time_limit": 15,
        "questions": [
            {
                "id": "q1",
                "question": "What is an email?",
                "options": ["A tool to send messages", "A storage device", "A programming language", "None of the above"],
                "correct_answer": "A tool to send messages",
                "explanation": "Email is an electronic mail system for sending and receiving messages over the internet.",
            },
            {
                "id": "q2",
                "question": "Which is a web browser?",
                "options": ["Firefox", "Microsoft Word", "Excel", "Paint"],
                "correct_answer": "Firefox",
                "explanation": "Firefox is a web browser used to browse the internet.",
            },
            {
                "id": "q3",
                "question": "What does URL stand for?",
                "options": [
                    "Uniform Resource Locator",
                    "Universal Reference Link",
                    "United Resource List",
                    "Uniform Reference Language",
                ],
                "correct_answer": "Uniform Resource Locator",
                "explanation": "URL (Uniform Resource Locator) is the web address of a website.",
            },
            {
                "id": "q4",
                "question": "Which is NOT a search engine?",
                "options": ["Google", "Firefox", "Bing", "DuckDuckGo"],
                "correct_answer": "Firefox",
                "explanation": "Firefox is a web browser, not a search engine.",
            },
            {
                "id": "q5",
                "question": "What is a password?",
                "options": ["A secret code to access accounts", "A computer part", "A type of email", "A browser extension"],
                "correct_answer": "A secret code to access accounts",
                "explanation": "A password is a confidential word or number to protect your accounts.",
            },
        ],
    },
    {
        "title": "Intermediate Digital Skills",
        "description": "Test your intermediate digital knowledge",
        "skill_category": "intermediate",
        "total_points": 100.0,
        "time_limit": 20,
        "questions": [
            {
                "id": "q1",
                "question": "What is a cloud storage service?",
                "options": ["Google Drive", "Microsoft Word", "Adobe Reader", "Notepad"],
                "correct_answer": "Google Drive",
                "explanation": "Google Drive is a cloud storage service for storing and sharing files online.",
            },
            {
                "id": "q2",
                "question": "What is SSL?",
                "options": ["Secure Socket Layer - encrypts data", "A file type", "A computer virus", "A browser extension"],
                "correct_answer": "Secure Socket Layer - encrypts data",
                "explanation": "SSL encrypts data transmitted between your browser and websites.",
            },
            {
                "id": "q3",
                "question": "What is a VPN?",
                "options": ["Virtual Private Network", "A video player", "A file format", "A messaging app"],
                "correct_answer": "Virtual Private Network",
                "explanation": "VPN creates a secure connection and masks your IP address.",
            },
        ],
    },
]


def _lessons(*titles_and_content):
    return [
        {
            "id": f"lesson{index}",
            "title": title,
            "content": content,
            "video_url": None,
            "resource_url": None,
        }
        for index, (title, content) in enumerate(titles_and_content, start=1)
    ]


DEMO_MODULES = [
    {
        "title": "Getting Started with Computers",
        "description": "Learn the basics of computer usage",
        "skill_level": "basic",
        "order": 1,
        "duration": 120,
        "lessons": _lessons(
            ("Introduction to Computers", "Learn what computers are and their basic components."),
            ("Using the Mouse and Keyboard", "Master mouse and keyboard controls."),
            ("File Management", "Organize and manage your files."),
        ),
    },
    {
        "title": "Internet and Email Basics",
        "description": "Learn to browse the internet and use email",
        "skill_level": "basic",
        "order": 2,
        "duration": 150,
        "lessons": _lessons(
            ("Introduction to the Internet", "Understand what the internet is and how it works."),
            ("Web Browsing", "Learn to navigate websites and search the internet."),
            ("Email Basics", "Create and use email accounts."),
        ),
    },
    {
        "title": "Microsoft Office Essentials",
        "description": "Master Word, Excel, and PowerPoint",
        "skill_level": "intermediate",
        "order": 3,
        "duration": 240,
        "lessons": _lessons(
            ("Microsoft Word Basics", "Create and format documents."),
            ("Excel Spreadsheets", "Work with data and formulas."),
            ("PowerPoint Presentations", "Create professional presentations."),
        ),
    },
]


def seed_database(db: Session) -> None:
    """Replace all platform content with the demo data set"""

    # children first
    db.query(ModuleProgress).delete()
    db.query(AssessmentResult).delete()
    db.query(LearningModule).delete()
    db.query(Assessment).delete()
    db.query(User).delete()
    logger.info("Cleared existing data")

    for data in DEMO_USERS:
        db.add(User(
            email=data["email"],
            name=data["name"],
            role=data["role"].value,
            literacy_level=data["literacy_level"].value,
        ))

    for data in DEMO_ASSESSMENTS:
        db.add(Assessment(**data))

    for data in DEMO_MODULES:
        db.add(LearningModule(**data))

    db.commit()
    logger.info(
        f"Seeded {len(DEMO_USERS)} users, {len(DEMO_ASSESSMENTS)} assessments, "
        f"{len(DEMO_MODULES)} learning modules"
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    session = SessionLocal()
    try:
        seed_database(session)
    finally:
        session.close()
