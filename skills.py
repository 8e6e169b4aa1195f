# skills.py
# This is our central "knowledge base" for the default rubric.
# Everything here can be overridden with a JSON rubric file (see rubric.py).

# The "key" is the canonical skill name.
# The "value" is a list of the other ways it might be written (case-insensitivity is handled separately).
# The canonical name always counts as an alias of itself.

MASTER_SKILL_LIST = {
    # --- Languages ---
    "Python": ["Python", "Python3", "CPython"],
    "Java": ["Java", "Java SE", "Java EE"],
    "JavaScript": ["JavaScript", "JS", "Javascript", "ECMAScript", "ES6"],
    "TypeScript": ["TypeScript", "TS"],
    "Golang": ["Golang", "Go Lang"],
    "C++": ["C++", "CPP"],
    "C#": ["C#", "C Sharp"],
    "Ruby": ["Ruby"],
    "PHP": ["PHP"],
    "Kotlin": ["Kotlin"],
    "Swift": ["Swift"],
    "Rust": ["Rust"],
    "Scala": ["Scala"],
    "R Language": ["R Language", "R Programming", "RStudio"],
    "HTML": ["HTML", "HTML5"],
    "CSS": ["CSS", "CSS3", "Sass", "SCSS"],

    # --- Frameworks / Libraries ---
    "React": ["React", "React.js", "ReactJS"],
    "Angular": ["Angular", "AngularJS"],
    "Vue.js": ["Vue.js", "Vue", "VueJS"],
    "Node.js": ["Node.js", "NodeJS"],
    "Express.js": ["Express.js", "ExpressJS"],
    "Django": ["Django"],
    "Flask": ["Flask"],
    "FastAPI": ["FastAPI"],
    "Spring Boot": ["Spring Boot", "Spring Framework"],
    ".NET": [".NET", "ASP.NET", "dotnet"],
    "GraphQL": ["GraphQL"],
    "RESTful APIs": ["RESTful APIs", "REST API", "REST APIs", "RESTful"],
    "Microservices": ["Microservices", "Microservice", "Microservices Architecture"],
    "API Development": ["API Development", "API Design"],

    # --- Data / Storage ---
    "SQL": ["SQL", "T-SQL", "PL/SQL"],
    "PostgreSQL": ["PostgreSQL", "Postgres"],
    "MySQL": ["MySQL"],
    "MongoDB": ["MongoDB", "Mongo"],
    "Redis": ["Redis"],
    "Elasticsearch": ["Elasticsearch", "Elastic Search"],
    "Database Design": ["Database Design", "Data Modeling", "Schema Design"],
    "Apache Spark": ["Apache Spark", "Spark", "PySpark"],
    "Kafka": ["Kafka", "Apache Kafka"],
    "Pandas": ["Pandas"],
    "NumPy": ["NumPy"],
    "Tableau": ["Tableau"],
    "PowerBI": ["Power BI", "PowerBI"],
    "Excel": ["Excel", "Microsoft Excel", "MS Excel"],

    # --- Machine Learning ---
    "Machine Learning": ["Machine Learning", "ML"],
    "Deep Learning": ["Deep Learning"],
    "Artificial Intelligence": ["Artificial Intelligence", "AI"],
    "TensorFlow": ["TensorFlow"],
    "PyTorch": ["PyTorch"],
    "Scikit-learn": ["Scikit-learn", "sklearn", "scikit learn"],
    "NLP": ["NLP", "Natural Language Processing"],
    "Statistics": ["Statistics", "Statistical Analysis"],

    # --- Cloud / DevOps ---
    "AWS": ["AWS", "Amazon Web Services"],
    "Azure": ["Azure", "Microsoft Azure"],
    "GCP": ["GCP", "Google Cloud Platform", "Google Cloud"],
    "Docker": ["Docker"],
    "Kubernetes": ["Kubernetes", "K8s"],
    "Terraform": ["Terraform"],
    "Ansible": ["Ansible"],
    "Jenkins": ["Jenkins"],
    "Git": ["Git", "GitHub", "GitLab", "Bitbucket"],
    "CI/CD": ["CI/CD", "Continuous Integration", "Continuous Deployment", "Continuous Delivery"],
    "Linux": ["Linux", "Unix", "Bash"],
    "Unit Testing": ["Unit Testing", "Unit Tests", "TDD", "Test Driven Development"],

    # --- HR ---
    "Recruitment": ["Recruitment", "Recruiting", "Talent Acquisition"],
    "Onboarding": ["Onboarding", "Employee Onboarding"],
    "HRIS": ["HRIS", "Human Resources Information System"],
    "Performance Management": ["Performance Management"],
    "Compensation & Benefits": ["Compensation & Benefits", "Comp & Ben"],

    # --- Finance ---
    "Financial Analysis": ["Financial Analysis", "Financial Modeling", "Financial Modelling"],
    "Financial Reporting": ["Financial Reporting"],
    "Forecasting": ["Forecasting"],
    "Budget Management": ["Budget Management", "Budgeting", "Financial Planning"],
    "GAAP": ["GAAP"],
    "IFRS": ["IFRS"],
    "Regulatory Compliance": ["Regulatory Compliance", "Compliance"],

    # --- Project Management ---
    "Agile Methodology": ["Agile", "Agile Methodology"],
    "Scrum": ["Scrum", "Scrum Master"],
    "Kanban": ["Kanban"],
    "Waterfall Methodology": ["Waterfall", "Waterfall Methodology"],
    "PMP": ["PMP", "Project Management Professional"],
    "PRINCE2": ["PRINCE2"],
    "JIRA": ["JIRA", "Atlassian JIRA"],
    "Confluence": ["Confluence"],
    "Project Management": ["Project Management"],
    "Risk Management": ["Risk Management", "Risk Mitigation"],
    "Stakeholder Management": ["Stakeholder Management", "Stakeholder Communication"],
    "SDLC": ["SDLC", "Software Development Life Cycle"],
    "Change Management": ["Change Management", "Change Control"],
    "ITIL": ["ITIL", "Information Technology Infrastructure Library"],

    # --- Core Soft Skills ---
    "Leadership": ["Leadership", "Team Leadership"],
    "Mentoring": ["Mentoring", "Mentorship", "Coaching"],
    "Communication": ["Communication", "Verbal Communication", "Written Communication"],
    "Negotiation": ["Negotiation"],
    "Problem Solving": ["Problem Solving", "Analytical Skills"],
}

# First word of a bullet that counts as a strong action verb.
ACTION_VERBS = [
    "Accelerated", "Achieved", "Administered", "Analyzed", "Architected", "Automated",
    "Built", "Championed", "Coached", "Collaborated", "Conducted", "Consolidated",
    "Coordinated", "Created", "Cut", "Debugged", "Decreased", "Delivered", "Deployed",
    "Designed", "Developed", "Directed", "Drove", "Enabled", "Engineered", "Enhanced",
    "Established", "Executed", "Expanded", "Facilitated", "Generated", "Grew", "Headed",
    "Improved", "Implemented", "Increased", "Initiated", "Integrated", "Introduced",
    "Launched", "Led", "Maintained", "Managed", "Mentored", "Migrated", "Modernized",
    "Negotiated", "Optimized", "Orchestrated", "Organized", "Oversaw", "Pioneered",
    "Planned", "Produced", "Programmed", "Reduced", "Refactored", "Resolved",
    "Restructured", "Revamped", "Saved", "Scaled", "Secured", "Shipped", "Spearheaded",
    "Streamlined", "Supervised", "Trained", "Transformed", "Upgraded", "Wrote",
]

# Header vocabulary per section label. Matching is case-insensitive and tolerates
# plurals and small typos, so only distinct phrasings need to be listed.
SECTION_HEADER_SYNONYMS = {
    "Summary": [
        "summary", "professional summary", "career summary", "executive summary",
        "profile", "professional profile", "about me", "objective", "career objective",
        "overview",
    ],
    "Experience": [
        "experience", "work experience", "professional experience", "employment",
        "employment history", "work history", "job history", "career history",
        "relevant experience", "experience summary", "internships",
    ],
    "Education": [
        "education", "academic background", "academic qualifications", "education history",
        "qualifications", "education and training",
    ],
    "Skills": [
        "skills", "technical skills", "core skills", "key skills", "competencies",
        "core competencies", "proficiencies", "technologies", "tech stack", "tools and technologies",
    ],
    "Certifications": [
        "certifications", "certification", "licenses", "licenses and certifications",
        "professional certifications", "courses", "training",
    ],
    "Contact": [
        "contact", "contact information", "contact details", "personal details", "personal information",
    ],
    "Other": [
        "projects", "personal projects", "academic projects", "selected projects",
        "achievements", "accomplishments", "awards", "honors and awards", "publications",
        "volunteer experience", "volunteering", "languages", "interests", "hobbies",
        "references", "activities", "leadership",
    ],
}

# Industry profiles in declaration order; weights express how central a skill is.
INDUSTRY_PROFILES = [
    {
        "name": "Software Development",
        "skills": {
            "Python": 1.0, "Java": 1.0, "JavaScript": 0.8, "TypeScript": 0.8, "C++": 0.8,
            "C#": 0.8, "Golang": 0.8, "Git": 0.6, "Unit Testing": 0.6, "SQL": 0.5,
            "Microservices": 0.7, "RESTful APIs": 0.6, "SDLC": 0.4, "Agile Methodology": 0.4,
        },
    },
    {
        "name": "Web Development",
        "skills": {
            "JavaScript": 1.0, "TypeScript": 0.9, "React": 1.0, "Angular": 0.8, "Vue.js": 0.8,
            "Node.js": 0.9, "Express.js": 0.6, "HTML": 0.8, "CSS": 0.8, "GraphQL": 0.5,
            "RESTful APIs": 0.7, "API Development": 0.6, "Django": 0.5, "Flask": 0.4,
        },
    },
    {
        "name": "Cloud Computing",
        "skills": {
            "AWS": 1.0, "Azure": 1.0, "GCP": 1.0, "Docker": 0.8, "Kubernetes": 0.9,
            "Terraform": 0.8, "Microservices": 0.5, "Linux": 0.5, "CI/CD": 0.6,
        },
    },
    {
        "name": "DevOps",
        "skills": {
            "Docker": 1.0, "Kubernetes": 1.0, "CI/CD": 1.0, "Jenkins": 0.8, "Terraform": 0.8,
            "Ansible": 0.7, "Linux": 0.8, "Git": 0.6, "AWS": 0.6, "Python": 0.3,
        },
    },
    {
        "name": "Data Science",
        "skills": {
            "Python": 0.8, "R Language": 0.8, "SQL": 0.7, "Pandas": 1.0, "NumPy": 0.8, "Statistics": 1.0,
            "Machine Learning": 0.9, "Scikit-learn": 0.8, "Tableau": 0.6, "PowerBI": 0.6,
            "Apache Spark": 0.6, "Excel": 0.3,
        },
    },
    {
        "name": "Machine Learning & AI",
        "skills": {
            "Machine Learning": 1.0, "Deep Learning": 1.0, "Artificial Intelligence": 0.8,
            "TensorFlow": 0.9, "PyTorch": 0.9, "Scikit-learn": 0.7, "NLP": 0.8, "Python": 0.7,
            "NumPy": 0.4,
        },
    },
    {
        "name": "Project Management",
        "skills": {
            "Project Management": 1.0, "Agile Methodology": 0.9, "Scrum": 0.9, "Kanban": 0.6,
            "Waterfall Methodology": 0.5, "PMP": 0.9, "PRINCE2": 0.7, "JIRA": 0.6,
            "Risk Management": 0.7, "Stakeholder Management": 0.8, "Budget Management": 0.5,
            "Leadership": 0.5, "Communication": 0.4,
        },
    },
    {
        "name": "Finance",
        "skills": {
            "Financial Analysis": 1.0, "Financial Reporting": 1.0, "Forecasting": 0.8,
            "Budget Management": 0.8, "GAAP": 0.8, "IFRS": 0.8, "Excel": 0.7,
            "Regulatory Compliance": 0.6, "PowerBI": 0.4,
        },
    },
    {
        "name": "Human Resources",
        "skills": {
            "Recruitment": 1.0, "Onboarding": 0.9, "HRIS": 0.8, "Performance Management": 0.9,
            "Compensation & Benefits": 0.9, "Communication": 0.5, "Negotiation": 0.4,
        },
    },
]

# Fields of study and the skills that make them relevant to a resume.
FIELDS_OF_STUDY = {
    "Computer Science": [
        "Python", "Java", "JavaScript", "C++", "SQL", "Machine Learning", "Git", "Linux", "Golang",
    ],
    "Software Engineering": ["Python", "Java", "JavaScript", "C#", "Unit Testing", "SDLC", "Git"],
    "Information Technology": ["Linux", "SQL", "AWS", "Azure", "ITIL", "Docker"],
    "Data Science": ["Python", "R Language", "SQL", "Pandas", "Statistics", "Machine Learning"],
    "Statistics": ["R Language", "Python", "Statistics", "Excel"],
    "Mathematics": ["Python", "R Language", "Statistics"],
    "Electrical Engineering": ["C++", "Python"],
    "Finance": ["Financial Analysis", "Financial Reporting", "Excel", "Forecasting", "GAAP", "IFRS"],
    "Accounting": ["Financial Reporting", "GAAP", "IFRS", "Excel"],
    "Business Administration": ["Project Management", "Budget Management", "Stakeholder Management"],
    "Human Resources": ["Recruitment", "Onboarding", "HRIS", "Performance Management"],
}
