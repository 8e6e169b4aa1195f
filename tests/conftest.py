import pytest

from rubric import RubricConfig

SAMPLE_RESUME = """John Doe
john.doe@example.com | (555) 123-4567 | linkedin.com/in/johndoe | github.com/johndoe

SUMMARY
Results-driven software engineer with 5+ years of experience in full-stack development.

EXPERIENCE
Senior Software Engineer | Tech Corp
2020 - Present
- Led development of microservices architecture using Python and Docker
- Implemented CI/CD pipeline with Jenkins
- Mentored junior developers on React and TypeScript
- Reduced API latency by 40% across 12 services

Software Engineer | StartupCo
2018 - 2020
- Developed React applications in JavaScript
- Optimized PostgreSQL database performance
- Implemented REST APIs with Node.js
- Increased test coverage to 85%

EDUCATION
Bachelor of Science in Computer Science
University of Technology, 2018
GPA: 3.8/4.0

SKILLS
- JavaScript/TypeScript
- React/Node.js
- AWS/Docker
- CI/CD
- Database Design
"""

UNSTRUCTURED_RESUME = """Jane Roe
I am a developer who knows Python and React.
I worked at several companies building web apps for customers, and I enjoy learning new things.
"""


@pytest.fixture
def config():
    return RubricConfig.from_dict({"referenceDate": "2025-06-01"})


@pytest.fixture
def sample_resume():
    return SAMPLE_RESUME


@pytest.fixture
def unstructured_resume():
    return UNSTRUCTURED_RESUME
