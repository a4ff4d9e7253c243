"""Curated core-skill catalogs per track, based on roadmap.sh v1.0."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from errors import ConfigurationError, UnknownTrack
from shared_types import Section, Track


@dataclass(frozen=True)
class Skill:
    """Core skill entry. Names are unique per track, ignoring case."""

    name: str
    weight: int  # impact, 1-10
    category: str
    section: Optional[Section] = None  # fullstack only

    def to_dict(self) -> dict:
        data = {"name": self.name, "weight": self.weight, "category": self.category}
        if self.section is not None:
            data["section"] = str(self.section)
        return data


@dataclass(frozen=True)
class TrackRoadmap:
    name: str
    description: str
    core_skills: tuple[Skill, ...]


def _fs(name: str, weight: int, category: str, section: Section) -> Skill:
    return Skill(name, weight, category, section)


_FRONTEND = (
    # Fundamentals
    Skill("HTML", 10, "fundamentals"),
    Skill("CSS", 10, "fundamentals"),
    Skill("JavaScript", 10, "fundamentals"),
    Skill("Responsive Design", 9, "fundamentals"),
    Skill("Browser DevTools", 9, "fundamentals"),
    # Modern JavaScript
    Skill("ES6+", 8, "javascript"),
    Skill("Async/Await", 8, "javascript"),
    Skill("Promises", 8, "javascript"),
    Skill("DOM Manipulation", 8, "javascript"),
    Skill("Event Handling", 7, "javascript"),
    # Frameworks & libraries
    Skill("React", 9, "frameworks"),
    Skill("Component Architecture", 8, "frameworks"),
    Skill("State Management", 8, "frameworks"),
    Skill("React Hooks", 8, "frameworks"),
    # Styling
    Skill("CSS Flexbox", 8, "styling"),
    Skill("CSS Grid", 8, "styling"),
    Skill("Sass/SCSS", 6, "styling"),
    Skill("CSS-in-JS", 6, "styling"),
    Skill("Tailwind CSS", 6, "styling"),
    # Build tools
    Skill("npm/yarn", 8, "tooling"),
    Skill("Webpack", 7, "tooling"),
    Skill("Vite", 7, "tooling"),
    Skill("Babel", 6, "tooling"),
    # Version control
    Skill("Git", 9, "fundamentals"),
    Skill("GitHub", 8, "fundamentals"),
    # Web APIs
    Skill("Fetch API", 8, "apis"),
    Skill("Local Storage", 7, "apis"),
    Skill("Web Storage", 6, "apis"),
    # Performance
    Skill("Performance Optimization", 7, "performance"),
    Skill("Lazy Loading", 6, "performance"),
    Skill("Code Splitting", 6, "performance"),
    # Testing
    Skill("Jest", 7, "testing"),
    Skill("React Testing Library", 6, "testing"),
    Skill("Unit Testing", 7, "testing"),
    # Accessibility
    Skill("Web Accessibility", 7, "accessibility"),
    Skill("ARIA", 6, "accessibility"),
    Skill("TypeScript", 7, "languages"),
    # Additional
    Skill("SEO Basics", 6, "optimization"),
    Skill("Browser Compatibility", 6, "fundamentals"),
    Skill("Progressive Web Apps", 5, "advanced"),
    Skill("Web Components", 5, "advanced"),
)

_BACKEND = (
    # Fundamentals
    Skill("JavaScript", 10, "fundamentals"),
    Skill("Node.js", 10, "fundamentals"),
    Skill("HTTP/HTTPS", 9, "fundamentals"),
    Skill("REST APIs", 9, "fundamentals"),
    Skill("JSON", 9, "fundamentals"),
    # Frameworks
    Skill("Express.js", 9, "frameworks"),
    Skill("Middleware", 8, "frameworks"),
    Skill("Routing", 8, "frameworks"),
    # Databases
    Skill("SQL", 9, "databases"),
    Skill("PostgreSQL", 8, "databases"),
    Skill("MySQL", 8, "databases"),
    Skill("MongoDB", 8, "databases"),
    Skill("Database Design", 8, "databases"),
    Skill("ORMs", 7, "databases"),
    # Authentication & security
    Skill("Authentication", 9, "security"),
    Skill("Authorization", 9, "security"),
    Skill("JWT", 8, "security"),
    Skill("OAuth", 7, "security"),
    Skill("Encryption", 8, "security"),
    Skill("HTTPS/TLS", 8, "security"),
    # API design
    Skill("RESTful Design", 8, "apis"),
    Skill("API Versioning", 7, "apis"),
    Skill("GraphQL", 6, "apis"),
    Skill("Error Handling", 8, "apis"),
    # Version control
    Skill("Git", 9, "fundamentals"),
    Skill("GitHub", 8, "fundamentals"),
    # Async programming
    Skill("Async/Await", 8, "programming"),
    Skill("Promises", 8, "programming"),
    Skill("Event Loop", 7, "programming"),
    # Testing
    Skill("Unit Testing", 8, "testing"),
    Skill("Integration Testing", 7, "testing"),
    Skill("Jest", 7, "testing"),
    Skill("API Testing", 7, "testing"),
    # DevOps basics
    Skill("Environment Variables", 8, "devops"),
    Skill("Logging", 7, "devops"),
    Skill("Deployment", 7, "devops"),
    Skill("CI/CD Basics", 6, "devops"),
    # Performance
    Skill("Caching", 7, "performance"),
    Skill("Rate Limiting", 7, "performance"),
    Skill("Load Balancing", 6, "performance"),
    # Additional
    Skill("Docker", 7, "devops"),
    Skill("Redis", 6, "databases"),
    Skill("Message Queues", 6, "architecture"),
    Skill("Microservices", 5, "architecture"),
    Skill("WebSockets", 6, "realtime"),
    Skill("TypeScript", 7, "languages"),
)

_FULLSTACK = (
    # Core fundamentals
    _fs("HTML", 10, "frontend-fundamentals", Section.FRONTEND),
    _fs("CSS", 10, "frontend-fundamentals", Section.FRONTEND),
    _fs("JavaScript", 10, "fundamentals", Section.BOTH),
    _fs("Git", 10, "fundamentals", Section.BOTH),
    # Frontend critical
    _fs("React", 9, "frontend-frameworks", Section.FRONTEND),
    _fs("Responsive Design", 9, "frontend-fundamentals", Section.FRONTEND),
    _fs("CSS Flexbox", 8, "frontend-styling", Section.FRONTEND),
    _fs("CSS Grid", 8, "frontend-styling", Section.FRONTEND),
    _fs("ES6+", 8, "javascript", Section.BOTH),
    _fs("Async/Await", 8, "javascript", Section.BOTH),
    _fs("Fetch API", 8, "frontend-apis", Section.FRONTEND),
    # Backend critical
    _fs("Node.js", 10, "backend-fundamentals", Section.BACKEND),
    _fs("Express.js", 9, "backend-frameworks", Section.BACKEND),
    _fs("REST APIs", 9, "backend-apis", Section.BACKEND),
    _fs("HTTP/HTTPS", 9, "backend-fundamentals", Section.BACKEND),
    _fs("SQL", 9, "backend-databases", Section.BACKEND),
    _fs("Authentication", 9, "backend-security", Section.BACKEND),
    _fs("Database Design", 8, "backend-databases", Section.BACKEND),
    # Full stack integration
    _fs("RESTful Design", 9, "integration", Section.BOTH),
    _fs("State Management", 8, "frontend-frameworks", Section.FRONTEND),
    _fs("Error Handling", 8, "integration", Section.BOTH),
    _fs("Environment Variables", 8, "backend-devops", Section.BACKEND),
    # Databases
    _fs("PostgreSQL", 8, "backend-databases", Section.BACKEND),
    _fs("MongoDB", 7, "backend-databases", Section.BACKEND),
    # Security
    _fs("Authorization", 8, "backend-security", Section.BACKEND),
    _fs("JWT", 8, "backend-security", Section.BACKEND),
    _fs("Encryption", 7, "backend-security", Section.BACKEND),
    # Build & deploy
    _fs("npm/yarn", 8, "tooling", Section.BOTH),
    _fs("Webpack", 7, "frontend-tooling", Section.FRONTEND),
    _fs("Deployment", 8, "backend-devops", Section.BACKEND),
    # Testing
    _fs("Unit Testing", 8, "testing", Section.BOTH),
    _fs("Integration Testing", 7, "backend-testing", Section.BACKEND),
    _fs("Jest", 7, "testing", Section.BOTH),
    # Performance
    _fs("Caching", 7, "backend-performance", Section.BACKEND),
    _fs("Performance Optimization", 7, "frontend-performance", Section.FRONTEND),
    _fs("Rate Limiting", 7, "backend-performance", Section.BACKEND),
    # Additional
    _fs("TypeScript", 7, "languages", Section.BOTH),
    _fs("Docker", 7, "backend-devops", Section.BACKEND),
    _fs("Web Accessibility", 7, "frontend-accessibility", Section.FRONTEND),
    _fs("Logging", 7, "backend-devops", Section.BACKEND),
    _fs("Browser DevTools", 7, "frontend-fundamentals", Section.FRONTEND),
)


def validate_catalog(roadmaps: Mapping[str, TrackRoadmap]) -> None:
    """Check catalog shape. Raises ConfigurationError on the first problem found."""
    for track, roadmap in roadmaps.items():
        if not roadmap.core_skills:
            raise ConfigurationError(f"Track {track} has no core skills")
        seen = set()
        for skill in roadmap.core_skills:
            if not 1 <= skill.weight <= 10:
                raise ConfigurationError(
                    f"Skill {skill.name} in {track} has weight {skill.weight}, expected 1-10"
                )
            key = skill.name.lower()
            if key in seen:
                raise ConfigurationError(f"Duplicate skill {skill.name} in {track}")
            seen.add(key)
            if (skill.section is not None) != (track == Track.FULLSTACK):
                raise ConfigurationError(
                    f"Skill {skill.name} in {track}: section tags are fullstack-only and required there"
                )


ROADMAPS: Mapping[Track, TrackRoadmap] = MappingProxyType(
    {
        Track.FRONTEND: TrackRoadmap(
            "Frontend Development", "Client-side web development skills", _FRONTEND
        ),
        Track.BACKEND: TrackRoadmap(
            "Backend Development", "Server-side development skills", _BACKEND
        ),
        Track.FULLSTACK: TrackRoadmap(
            "Full Stack Development", "Complete web development stack", _FULLSTACK
        ),
    }
)

validate_catalog(ROADMAPS)


def track_info(track: str) -> TrackRoadmap:
    """Roadmap for a track. Raises UnknownTrack."""
    try:
        return ROADMAPS[Track(track)]
    except ValueError:
        raise UnknownTrack(track) from None


def core_skills(track: str) -> tuple[Skill, ...]:
    """Core skills for a track, in catalog order. Raises UnknownTrack."""
    return track_info(track).core_skills


def find_skill(track: str, name: str) -> Optional[Skill]:
    """Case-insensitive catalog lookup."""
    target = name.lower()
    for skill in core_skills(track):
        if skill.name.lower() == target:
            return skill
    return None


def skill_weight(track: str, name: str) -> int:
    """Catalog weight of a skill, 0 if the track doesn't list it."""
    skill = find_skill(track, name)
    return skill.weight if skill else 0


def is_core_skill(track: str, name: str) -> bool:
    return find_skill(track, name) is not None


def all_skills() -> list[str]:
    """Sorted union of skill names across every track (for autocomplete)."""
    names = {skill.name for roadmap in ROADMAPS.values() for skill in roadmap.core_skills}
    return sorted(names)
