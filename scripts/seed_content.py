#!/usr/bin/env python3
"""Seed a handful of published job competitions, guidance articles and exam dates.

Existing slugs are skipped, so the script can be re-run safely.

Run from the repository root:
    python scripts/seed_content.py
"""

import sys
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add backend to path when running as script
backend_dir = Path(__file__).resolve().parent.parent / "backend"
if backend_dir.exists():
    sys.path.insert(0, str(backend_dir))

from tawjih.models.base import SyncSessionLocal
from tawjih.models.exam_calendar import ExamCalendar
from tawjih.models.job_competition import JobCompetition
from tawjih.models.school_guidance import SchoolGuidance
from tawjih.models.seo_meta import SeoMeta

NOW = datetime.now(timezone.utc)

JOBS = [
    {
        "title_ar": "مباراة توظيف أساتذة التعليم الابتدائي",
        "slug_ar": "مباراة-توظيف-أساتذة-التعليم-الابتدائي",
        "body_ar": "تعلن الأكاديمية الجهوية للتربية والتكوين عن تنظيم مباراة توظيف أساتذة التعليم الابتدائي. "
        "يشترط في المترشحين الحصول على الإجازة.",
        "sector": "التعليم",
        "region": "الدار البيضاء سطات",
        "closing_date": NOW + timedelta(days=5),
        "featured": True,
        "seo": {"title": "مباراة أساتذة التعليم الابتدائي", "description": "شروط وآجال مباراة توظيف الأساتذة"},
    },
    {
        "title_ar": "مباراة توظيف أطباء بوزارة الصحة",
        "slug_ar": "مباراة-توظيف-أطباء-وزارة-الصحة",
        "body_ar": "تنظم وزارة الصحة والحماية الاجتماعية مباراة لتوظيف أطباء عامين. آخر أجل لإيداع الملفات بعد شهر.",
        "sector": "الصحة",
        "region": "الرباط سلا القنيطرة",
        "closing_date": NOW + timedelta(days=30),
        "featured": False,
    },
]

GUIDANCE = [
    {
        "title_ar": "كيف تختار شعبتك بعد الباكالوريا",
        "slug_ar": "كيف-تختار-شعبتك-بعد-الباكالوريا",
        "body_ar": "دليل عملي لاختيار الشعبة المناسبة بعد الباكالوريا حسب الميول والمعدل وفرص الشغل.",
        "sector": "التوجيه المدرسي",
        "region": "وطني",
        "featured": True,
    },
]

EXAMS = [
    {
        "title_ar": "الامتحان الوطني الموحد للباكالوريا - الدورة العادية",
        "slug_ar": "الامتحان-الوطني-للباكالوريا-الدورة-العادية",
        "body_ar": "يجرى الامتحان الوطني الموحد للباكالوريا في دورته العادية وفق الجدولة الزمنية الرسمية.",
        "sector": "التعليم",
        "region": "وطني",
        "exam_date": NOW + timedelta(days=45),
        "subject": "جميع المواد",
        "school_level": "الثانية باكالوريا",
        "featured": False,
    },
]


def _seed_rows(db, model, rows: list[dict]) -> int:
    created = 0
    for data in rows:
        row = dict(data)
        seo = row.pop("seo", None)
        if db.query(model).filter(model.slug_ar == row["slug_ar"]).first():
            print(f"  Skipped: {row['slug_ar']} already exists")
            continue

        record = model(id=uuid.uuid4(), published=True, **row)
        if seo:
            record.seo_meta = SeoMeta(**seo)
        db.add(record)
        created += 1
        print(f"  Added: {row['title_ar']}")
    return created


def seed():
    db = SyncSessionLocal()
    try:
        jobs = _seed_rows(db, JobCompetition, JOBS)
        guidance = _seed_rows(db, SchoolGuidance, GUIDANCE)
        exams = _seed_rows(db, ExamCalendar, EXAMS)
        db.commit()
        print(f"\nDone: {jobs} jobs, {guidance} guidance articles, {exams} exam dates created")
    except Exception as e:
        db.rollback()
        print(f"Error: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()
