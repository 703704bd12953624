"""
Database Seed Data Module

Sample catalog, users, resources, roadmaps and ratings for local development.
Run with: python -m syllabus_hub.db.seed_data
"""
import asyncio
from typing import Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from syllabus_hub.core.database import AsyncSessionLocal, reset_db, close_db
from syllabus_hub.core.logging_config import logger
from syllabus_hub.core.security import get_password_hash
from syllabus_hub.models import (
    Branch,
    Program,
    Year,
    Semester,
    Subject,
    Resource,
    ResourceRating,
    ResourceType,
    Roadmap,
    RoadmapDifficulty,
    RoadmapType,
    User,
    UserRole,
    empty_rating_distribution,
)
from syllabus_hub.schemas.roadmap import RoadmapStepCreate
from syllabus_hub.services.rating_service import recompute_all_ratings
from syllabus_hub.services.roadmap_service import replace_steps


# ==================== Sample Data Constants ====================

SAMPLE_USERS = [
    {"key": "admin", "name": "Dr. Admin Kumar", "email": "admin@campussyllabus.com",
     "password": "Admin@123", "role": UserRole.ADMIN},
    {"key": "moderator", "name": "Prof. Rajesh Sharma", "email": "moderator@campussyllabus.com",
     "password": "Moderator@123", "role": UserRole.MODERATOR},
    {"key": "student", "name": "Arjun Patel", "email": "student@campussyllabus.com",
     "password": "Student@123", "role": UserRole.STUDENT},
]

SAMPLE_BRANCHES = [
    ("CSE", "Computer Science & Engineering"),
    ("ECE", "Electronics & Communication Engineering"),
    ("ME", "Mechanical Engineering"),
    ("CE", "Civil Engineering"),
    ("EE", "Electrical Engineering"),
    ("IT", "Information Technology"),
    ("CHE", "Chemical Engineering"),
    ("AE", "Aerospace Engineering"),
]

# (code, name, duration in years) - all under CSE
SAMPLE_PROGRAMS = [
    ("BTECH", "Bachelor of Technology", 4),
    ("MTECH", "Master of Technology", 2),
]

# (code, name, branch code, semester number, topics)
SAMPLE_SUBJECTS = [
    ("CS101", "Programming in C", "CSE", 1, ["Basics", "Loops", "Functions"]),
    ("CS102", "Data Structures", "CSE", 3, ["Arrays", "Linked Lists", "Trees"]),
    ("CS201", "Algorithms", "CSE", 4, ["Sorting", "Searching", "Graph Algorithms"]),
    ("ECE101", "Basic Electronics", "ECE", 1, ["Diodes", "Transistors"]),
    ("ME101", "Engineering Mechanics", "ME", 1, ["Statics", "Dynamics"]),
]

SAMPLE_RESOURCES = [
    {
        "key": "nptel_c",
        "type": ResourceType.LECTURE,
        "title": "NPTEL C Programming",
        "url": "https://nptel.ac.in/courses/106105085",
        "description": "Comprehensive C Programming course by NPTEL covering all fundamentals",
        "provider": "NPTEL",
        "subject": "CS101",
        "topics": ["Basics", "Loops", "Functions"],
        "tags": ["video", "nptel", "c-programming"],
        "prerequisites": [
            {"title": "Basic Computer Knowledge",
             "description": "Understanding of computer basics and operating systems"},
        ],
        "added_by": "admin",
        "is_approved": True,
        "quality_score": 90,
    },
    {
        "key": "gate_smashers_ds",
        "type": ResourceType.LECTURE,
        "title": "Gate Smashers Data Structures",
        "url": "https://www.youtube.com/playlist?list=PLxCzCOWd7aiEwaANNt3OqJPVIxwp2ebiT",
        "description": "Complete Data Structures playlist by Gate Smashers",
        "provider": "Gate Smashers",
        "subject": "CS102",
        "topics": ["Arrays", "Linked Lists", "Trees"],
        "tags": ["video", "gate-smashers", "data-structures"],
        "prerequisites": [
            {"title": "Programming in C",
             "description": "Basic understanding of C programming language",
             "resource_link": "https://nptel.ac.in/courses/106105085"},
        ],
        "added_by": "admin",
        "is_approved": True,
        "quality_score": 85,
    },
    {
        "key": "gfg_ds",
        "type": ResourceType.NOTES,
        "title": "GeeksforGeeks Data Structures",
        "url": "https://www.geeksforgeeks.org/data-structures/",
        "description": "Comprehensive notes and tutorials on Data Structures",
        "provider": "GeeksforGeeks",
        "subject": "CS102",
        "topics": ["Trees", "Graphs", "Hash Tables"],
        "tags": ["notes", "gfg", "tutorial"],
        "prerequisites": [],
        "added_by": "admin",
        "is_approved": True,
        "quality_score": 80,
    },
    {
        "key": "let_us_c",
        "type": ResourceType.BOOK,
        "title": "Let Us C by Yashavant Kanetkar",
        "url": "https://www.amazon.in/Let-Us-C-Yashavant-Kanetkar/dp/9388511396",
        "description": "Popular C programming book for beginners",
        "provider": "BPB Publications",
        "subject": "CS101",
        "topics": ["Basics", "Pointers", "Functions"],
        "tags": ["book", "c-programming", "beginner"],
        "prerequisites": [],
        "added_by": "admin",
        "is_approved": True,
        "quality_score": 95,
    },
    {
        "key": "abdul_bari",
        "type": ResourceType.LECTURE,
        "title": "Abdul Bari Algorithms",
        "url": "https://www.youtube.com/playlist?list=PLDN4rrl48XKpZkf03iYFl-O29szjTrs_O",
        "description": "Complete Algorithms course covering sorting, searching and advanced algorithms",
        "provider": "Abdul Bari",
        "subject": "CS201",
        "topics": ["Sorting", "Searching", "Graph Algorithms", "Dynamic Programming"],
        "tags": ["video", "algorithms", "abdul-bari"],
        "prerequisites": [],
        "added_by": "moderator",
        "is_approved": True,
        "quality_score": 92,
    },
    {
        "key": "cs101_syllabus",
        "type": ResourceType.SYLLABUS,
        "title": "CS101 Official Syllabus",
        "url": "https://example.com/cs101-syllabus.pdf",
        "description": "Official syllabus for Programming in C course",
        "provider": "University",
        "subject": "CS101",
        "topics": ["Course Outline", "Learning Objectives"],
        "tags": ["syllabus", "official"],
        "prerequisites": [],
        "added_by": "admin",
        "is_approved": True,
        "quality_score": 100,
    },
    {
        "key": "student_notes",
        "type": ResourceType.NOTES,
        "title": "Handwritten Linked List Notes",
        "url": "https://example.com/notes/linked-lists.pdf",
        "description": "Scanned class notes on singly and doubly linked lists",
        "provider": "Student Upload",
        "subject": "CS102",
        "topics": ["Linked Lists"],
        "tags": ["notes", "handwritten"],
        "prerequisites": [],
        "added_by": "student",
        "is_approved": False,
        "quality_score": 0,
    },
]

SAMPLE_ROADMAPS = [
    {
        "subject": "CS101",
        "type": RoadmapType.GENERAL,
        "title": "Complete C Programming Mastery",
        "description": "A roadmap to master C programming from basics to advanced concepts",
        "difficulty": RoadmapDifficulty.BEGINNER,
        "created_by": "admin",
        "is_approved": True,
        "tags": ["c-programming", "beginner", "complete-course"],
        "steps": [
            ("Setup Development Environment", "Install a C compiler and set up your editor", 2, [], ["nptel_c"]),
            ("Learn Basic Syntax", "Variables, data types and basic input/output", 8,
             ["Development Environment Setup"], ["nptel_c", "let_us_c"]),
            ("Control Structures", "Loops, conditions and decision making", 10,
             ["Basic Syntax Knowledge"], ["nptel_c"]),
            ("Functions and Modular Programming", "Write reusable code with functions", 12,
             ["Control Structures Mastery"], ["nptel_c", "let_us_c"]),
            ("Pointers and Memory Management", "Pointers and dynamic memory allocation", 8,
             ["Functions Understanding"], ["let_us_c"]),
        ],
    },
    {
        "subject": "CS102",
        "type": RoadmapType.MIDSEM,
        "title": "Data Structures for Midsem Preparation",
        "description": "Focused preparation plan for the data structures midsem exam",
        "difficulty": RoadmapDifficulty.INTERMEDIATE,
        "created_by": "moderator",
        "is_approved": True,
        "tags": ["data-structures", "midsem", "exam-prep"],
        "steps": [
            ("Arrays and Basic Operations", "Array operations, searching and basic algorithms", 6,
             ["C Programming Basics"], ["gate_smashers_ds", "gfg_ds"]),
            ("Linked Lists", "Types of linked lists and their operations", 8,
             ["Arrays Knowledge", "Pointers in C"], ["gate_smashers_ds", "gfg_ds"]),
            ("Stacks and Queues", "Stack and queue implementations and applications", 6,
             ["Linked Lists Understanding"], ["gate_smashers_ds"]),
            ("Trees Fundamentals", "Binary trees, traversals and basic tree operations", 5,
             ["Stacks and Queues"], ["gfg_ds"]),
        ],
    },
    {
        "subject": "CS201",
        "type": RoadmapType.ENDSEM,
        "title": "Algorithms End Semester Guide",
        "description": "Preparation for the algorithms end semester covering all major topics",
        "difficulty": RoadmapDifficulty.ADVANCED,
        "created_by": "moderator",
        "is_approved": False,
        "tags": ["algorithms", "endsem"],
        "steps": [
            ("Sorting Algorithms", "All sorting algorithms with complexity analysis", 12,
             ["Data Structures Knowledge"], ["abdul_bari"]),
            ("Searching Algorithms", "Binary search and advanced searching", 8,
             ["Sorting Algorithms Mastery"], ["abdul_bari"]),
            ("Graph Algorithms", "DFS, BFS, shortest paths and spanning trees", 15,
             ["Searching Algorithms"], ["abdul_bari"]),
        ],
    },
]

# (user key, resource key, stars, review)
SAMPLE_RATINGS = [
    ("student", "nptel_c", 5, "Clear explanations, great for first years"),
    ("moderator", "nptel_c", 4, None),
    ("student", "gate_smashers_ds", 5, "Saved me before the midsem"),
    ("admin", "gate_smashers_ds", 4, None),
    ("student", "let_us_c", 3, "Good but a bit dated"),
    ("student", "abdul_bari", 5, None),
]


# ==================== Seeders ====================

async def seed_users(db: AsyncSession) -> Dict[str, User]:
    users = {}
    for data in SAMPLE_USERS:
        user = User(
            name=data["name"],
            email=data["email"],
            hashed_password=get_password_hash(data["password"]),
            role=data["role"],
        )
        db.add(user)
        users[data["key"]] = user
    await db.flush()
    logger.info(f"[Seed] Created {len(users)} users")
    return users


async def seed_catalog(db: AsyncSession) -> Dict[str, Subject]:
    branches = {code: Branch(code=code, name=name) for code, name in SAMPLE_BRANCHES}
    db.add_all(branches.values())
    await db.flush()

    semesters: Dict[int, Semester] = {}
    for code, name, duration in SAMPLE_PROGRAMS:
        program = Program(code=code, name=name, branch_id=branches["CSE"].id, duration_years=duration)
        db.add(program)
        await db.flush()

        for year_number in range(1, duration + 1):
            year = Year(year=year_number, program_id=program.id)
            db.add(year)
            await db.flush()

            for number in (year_number * 2 - 1, year_number * 2):
                semester = Semester(number=number, year_id=year.id)
                db.add(semester)
                # Subjects hang off the BTECH semesters
                if code == "BTECH":
                    semesters[number] = semester
    await db.flush()

    subjects = {}
    for code, name, branch_code, semester_number, topics in SAMPLE_SUBJECTS:
        subject = Subject(
            code=code,
            name=name,
            branch_id=branches[branch_code].id,
            semester_id=semesters[semester_number].id,
            credits=4,
            topics=topics,
        )
        db.add(subject)
        subjects[code] = subject
    await db.flush()

    logger.info(f"[Seed] Created {len(branches)} branches, {len(SAMPLE_PROGRAMS)} programs, {len(subjects)} subjects")
    return subjects


async def seed_resources(db: AsyncSession, users: Dict[str, User], subjects: Dict[str, Subject]) -> Dict[str, Resource]:
    resources = {}
    for data in SAMPLE_RESOURCES:
        resource = Resource(
            type=data["type"],
            title=data["title"],
            url=data["url"],
            description=data["description"],
            provider=data["provider"],
            subject_id=subjects[data["subject"]].id,
            topics=data["topics"],
            tags=data["tags"],
            prerequisites=data["prerequisites"],
            added_by_id=users[data["added_by"]].id,
            is_approved=data["is_approved"],
            quality_score=data["quality_score"],
            rating_distribution=empty_rating_distribution(),
        )
        db.add(resource)
        resources[data["key"]] = resource
    await db.flush()
    logger.info(f"[Seed] Created {len(resources)} resources")
    return resources


async def seed_roadmaps(
    db: AsyncSession,
    users: Dict[str, User],
    subjects: Dict[str, Subject],
    resources: Dict[str, Resource],
) -> List[Roadmap]:
    roadmaps = []
    for data in SAMPLE_ROADMAPS:
        roadmap = Roadmap(
            subject_id=subjects[data["subject"]].id,
            type=data["type"],
            title=data["title"],
            description=data["description"],
            difficulty=data["difficulty"],
            created_by_id=users[data["created_by"]].id,
            is_public=True,
            is_approved=data["is_approved"],
            tags=data["tags"],
        )
        steps = [
            RoadmapStepCreate(
                title=title,
                description=description,
                estimated_hours=hours,
                prerequisites=prerequisites,
                resources=[resources[key].id for key in resource_keys],
            )
            for title, description, hours, prerequisites, resource_keys in data["steps"]
        ]
        await replace_steps(db, roadmap, steps)
        db.add(roadmap)
        roadmaps.append(roadmap)
    await db.flush()
    logger.info(f"[Seed] Created {len(roadmaps)} roadmaps")
    return roadmaps


async def seed_ratings(db: AsyncSession, users: Dict[str, User], resources: Dict[str, Resource]) -> None:
    for user_key, resource_key, stars, review in SAMPLE_RATINGS:
        db.add(ResourceRating(
            resource_id=resources[resource_key].id,
            user_id=users[user_key].id,
            rating=stars,
            review=review,
        ))
    await db.flush()
    updated = await recompute_all_ratings(db)
    logger.info(f"[Seed] Created {len(SAMPLE_RATINGS)} ratings across {updated} resources")


async def seed_all():
    """Reset the schema and load every sample table"""
    logger.info("[Seed] Resetting database schema...")
    await reset_db()

    async with AsyncSessionLocal() as db:
        try:
            users = await seed_users(db)
            subjects = await seed_catalog(db)
            resources = await seed_resources(db, users, subjects)
            await seed_roadmaps(db, users, subjects, resources)
            await seed_ratings(db, users, resources)
            await db.commit()
        except Exception:
            await db.rollback()
            logger.error("[Seed] Seeding failed", exc_info=True)
            raise

    logger.info("[Seed] Database seeded")
    for data in SAMPLE_USERS:
        logger.info(f"[Seed] Login: {data['email']} / {data['password']}")


async def _run():
    try:
        await seed_all()
    finally:
        await close_db()


def main():
    asyncio.run(_run())


if __name__ == "__main__":
    main()
