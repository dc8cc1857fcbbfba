import asyncio
import logging
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dev2050.common.database.database import async_session
from dev2050.models.models import LearningPath, LearningStep

logger = logging.getLogger(__name__)

learning_paths_data = [
    {
        "title": "DevOps Engineer",
        "description": "Master the art of building, deploying, and maintaining scalable infrastructure.",
        "skill": "DevOps",
        "icon": "🚀",
        "difficulty": "Intermediate",
        "duration": "6-8 months",
        "steps": [
            ("Linux Fundamentals", "Learn Linux command line, file systems, permissions, and shell scripting.", 40,
             ["Linux Journey (linuxjourney.com)", "The Linux Command Line by William Shotts", "OverTheWire Bandit (wargames)"]),
            ("Version Control with Git", "Master Git workflows, branching strategies, and collaboration techniques.", 20,
             ["Pro Git Book (git-scm.com)", "GitHub Learning Lab", "Atlassian Git Tutorials"]),
            ("Networking Basics", "Understand TCP/IP, DNS, HTTP/HTTPS, load balancing, and firewalls.", 30,
             ["Computer Networking: A Top-Down Approach", "Cisco Networking Basics", "NetworkChuck YouTube Channel"]),
            ("Containerization with Docker", "Learn Docker fundamentals, Dockerfile creation, and container orchestration basics.", 35,
             ["Docker Official Documentation", "Docker Mastery Course (Udemy)", "Play with Docker (labs.play-with-docker.com)"]),
            ("Kubernetes Orchestration", "Deploy and manage containerized applications at scale with Kubernetes.", 50,
             ["Kubernetes Official Tutorials", "Kubernetes the Hard Way", "KodeKloud Kubernetes Course"]),
            ("CI/CD Pipelines", "Implement continuous integration and deployment with Jenkins, GitLab CI, or GitHub Actions.", 30,
             ["GitHub Actions Documentation", "Jenkins User Documentation", "GitLab CI/CD Tutorials"]),
            ("Infrastructure as Code", "Automate infrastructure provisioning with Terraform and Ansible.", 40,
             ["Terraform Official Tutorials", "Ansible for DevOps by Jeff Geerling", "HashiCorp Learn Platform"]),
            ("Cloud Platforms", "Get hands-on with AWS, Azure, or GCP services and architecture.", 60,
             ["AWS Certified Solutions Architect", "A Cloud Guru", "Google Cloud Skills Boost"]),
            ("Monitoring & Logging", "Implement observability with Prometheus, Grafana, ELK stack, and distributed tracing.", 35,
             ["Prometheus Documentation", "Grafana Tutorials", "Elastic Stack Guide"]),
        ],
    },
    {
        "title": "Full Stack Developer",
        "description": "Build complete web applications from frontend to backend and deployment.",
        "skill": "Full Stack",
        "icon": "💻",
        "difficulty": "Beginner",
        "duration": "8-10 months",
        "steps": [
            ("HTML & CSS Fundamentals", "Master semantic HTML, CSS layouts, Flexbox, Grid, and responsive design.", 40,
             ["MDN Web Docs", "CSS Tricks", "freeCodeCamp Responsive Web Design"]),
            ("JavaScript Essentials", "Learn JavaScript fundamentals, ES6+, DOM manipulation, and async programming.", 60,
             ["JavaScript.info", "Eloquent JavaScript", "You Don't Know JS (book series)"]),
            ("Frontend Framework (React)", "Build interactive UIs with React, hooks, state management, and routing.", 50,
             ["React Official Documentation", "Full Stack Open (React section)", "Epic React by Kent C. Dodds"]),
            ("Backend with Node.js", "Create RESTful APIs with Node.js, Express, and understand server-side concepts.", 45,
             ["Node.js Official Docs", "The Complete Node.js Developer Course", "Express.js Guide"]),
            ("Database Management", "Work with SQL (PostgreSQL) and NoSQL (MongoDB) databases.", 40,
             ["PostgreSQL Tutorial", "MongoDB University", "SQL Zoo"]),
            ("Authentication & Security", "Implement JWT, OAuth, password hashing, and security best practices.", 30,
             ["OWASP Top 10", "Auth0 Documentation", "Web Security Academy"]),
            ("API Design & Integration", "Design RESTful APIs, work with GraphQL, and integrate third-party services.", 25,
             ["REST API Tutorial", "GraphQL Official Tutorial", "Postman Learning Center"]),
            ("Testing & Quality Assurance", "Write unit tests, integration tests, and E2E tests with Jest and Cypress.", 35,
             ["Jest Documentation", "Testing Library", "Cypress.io Tutorials"]),
            ("Deployment & DevOps Basics", "Deploy applications to cloud platforms, set up CI/CD, and monitor production.", 30,
             ["Vercel Documentation", "Heroku Dev Center", "Docker for Beginners"]),
        ],
    },
    {
        "title": "Cloud Architect",
        "description": "Design and implement scalable, secure, and cost-effective cloud solutions.",
        "skill": "Cloud Architecture",
        "icon": "☁️",
        "difficulty": "Advanced",
        "duration": "10-12 months",
        "steps": [
            ("Cloud Computing Fundamentals", "Understand IaaS, PaaS, SaaS, and core cloud concepts.", 30,
             ["AWS Cloud Practitioner Essentials", "Microsoft Azure Fundamentals", "Google Cloud Fundamentals"]),
            ("Compute Services", "Master EC2, Lambda, App Service, Cloud Functions, and serverless architectures.", 45,
             ["AWS Compute Services Deep Dive", "Serverless Framework Documentation", "Azure Compute Documentation"]),
            ("Storage & Databases", "Work with S3, RDS, DynamoDB, Blob Storage, and managed database services.", 40,
             ["AWS Storage Services", "Database Migration Strategies", "Cloud Database Best Practices"]),
            ("Networking & Content Delivery", "Design VPCs, subnets, load balancers, CDNs, and network security.", 50,
             ["AWS VPC Masterclass", "Azure Networking", "CloudFront & CDN Strategies"]),
            ("Security & Compliance", "Implement IAM, encryption, compliance frameworks, and security best practices.", 45,
             ["AWS Security Best Practices", "Cloud Security Alliance", "Azure Security Center"]),
            ("High Availability & Disaster Recovery", "Design fault-tolerant systems with multi-region deployments and backup strategies.", 40,
             ["AWS Well-Architected Framework", "Disaster Recovery Planning", "High Availability Patterns"]),
            ("Cost Optimization", "Analyze and optimize cloud spending with cost management tools and strategies.", 25,
             ["AWS Cost Optimization", "Azure Cost Management", "FinOps Foundation"]),
            ("Architecture Patterns", "Learn microservices, event-driven, and cloud-native architecture patterns.", 50,
             ["Cloud Design Patterns", "Microservices Architecture", "Event-Driven Architecture Guide"]),
        ],
    },
]


async def seed_learning_paths(session: AsyncSession) -> int:
    """
    Insert the learning path catalog. Paths whose skill is already present are
    left alone, so the seed can be re-run safely. Returns the number created.
    """
    existing = set((await session.execute(select(LearningPath.skill))).scalars().all())
    created = 0
    for data in learning_paths_data:
        if data["skill"] in existing:
            logger.info("Skipping learning path %s (already exists)", data["title"])
            continue
        path = LearningPath(
            title=data["title"],
            description=data["description"],
            skill=data["skill"],
            icon=data["icon"],
            difficulty=data["difficulty"],
            duration=data["duration"],
        )
        for order, (title, description, hours, resources) in enumerate(data["steps"], start=1):
            path.steps.append(LearningStep(
                title=title,
                description=description,
                order=order,
                resources=resources,
                estimated_hours=hours,
            ))
        session.add(path)
        created += 1
        logger.info("Created learning path: %s", path.title)
    return created


async def main():
    async with async_session() as session:
        async with session.begin():
            await seed_learning_paths(session)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
