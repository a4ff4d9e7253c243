"""Prerequisite chains per track and learning-order resolution.

Graph format: skill -> direct prerequisites. The graphs are meant to be
acyclic, but ordering tolerates cycles and prerequisites outside the
requested set.
"""

from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from roadmap.models import Suggestion
from shared_types import Track


def _freeze(graph: dict[str, list[str]]) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType({skill: tuple(prereqs) for skill, prereqs in graph.items()})


_FRONTEND = {
    "HTML": [],
    "CSS": ["HTML"],
    "JavaScript": ["HTML"],
    # Advanced CSS
    "CSS Flexbox": ["CSS"],
    "CSS Grid": ["CSS"],
    "Responsive Design": ["CSS", "CSS Flexbox"],
    "Sass/SCSS": ["CSS"],
    "CSS-in-JS": ["CSS", "JavaScript"],
    "Tailwind CSS": ["CSS"],
    # JavaScript progression
    "ES6+": ["JavaScript"],
    "DOM Manipulation": ["JavaScript"],
    "Event Handling": ["JavaScript", "DOM Manipulation"],
    "Promises": ["JavaScript", "ES6+"],
    "Async/Await": ["Promises"],
    "Fetch API": ["Promises", "Async/Await"],
    # React ecosystem
    "React": ["JavaScript", "ES6+", "HTML", "CSS"],
    "Component Architecture": ["React"],
    "React Hooks": ["React", "Component Architecture"],
    "State Management": ["React", "React Hooks"],
    # Build tools
    "npm/yarn": ["JavaScript"],
    "Babel": ["JavaScript", "ES6+"],
    "Webpack": ["npm/yarn", "JavaScript"],
    "Vite": ["npm/yarn", "JavaScript"],
    # Version control
    "Git": [],
    "GitHub": ["Git"],
    # Web APIs
    "Local Storage": ["JavaScript"],
    "Web Storage": ["JavaScript"],
    # Browser
    "Browser DevTools": ["HTML", "CSS", "JavaScript"],
    "Browser Compatibility": ["HTML", "CSS", "JavaScript"],
    # Performance
    "Performance Optimization": ["JavaScript", "React"],
    "Lazy Loading": ["JavaScript", "React"],
    "Code Splitting": ["Webpack", "React"],
    # Testing
    "Unit Testing": ["JavaScript"],
    "Jest": ["JavaScript", "Unit Testing"],
    "React Testing Library": ["React", "Jest"],
    # Accessibility
    "Web Accessibility": ["HTML", "CSS"],
    "ARIA": ["HTML", "Web Accessibility"],
    # Advanced
    "TypeScript": ["JavaScript", "ES6+"],
    "SEO Basics": ["HTML"],
    "Progressive Web Apps": ["JavaScript", "Service Workers", "Fetch API"],
    "Web Components": ["JavaScript", "HTML", "CSS"],
}

_BACKEND = {
    "JavaScript": [],
    "Node.js": ["JavaScript"],
    "JSON": ["JavaScript"],
    "HTTP/HTTPS": [],
    # Express
    "Express.js": ["Node.js", "JavaScript"],
    "Middleware": ["Express.js"],
    "Routing": ["Express.js"],
    # APIs
    "REST APIs": ["HTTP/HTTPS", "JSON"],
    "RESTful Design": ["REST APIs", "Express.js"],
    "API Versioning": ["RESTful Design"],
    "GraphQL": ["JavaScript", "REST APIs"],
    "Error Handling": ["Express.js", "REST APIs"],
    "API Testing": ["REST APIs", "Unit Testing"],
    # Databases
    "SQL": [],
    "Database Design": ["SQL"],
    "PostgreSQL": ["SQL", "Database Design"],
    "MySQL": ["SQL", "Database Design"],
    "MongoDB": ["JSON"],
    "ORMs": ["SQL", "Node.js"],
    "Redis": ["Node.js"],
    # Security
    "Authentication": ["Express.js", "HTTP/HTTPS"],
    "Authorization": ["Authentication"],
    "JWT": ["Authentication", "JSON"],
    "OAuth": ["Authentication"],
    "Encryption": ["JavaScript"],
    "HTTPS/TLS": ["HTTP/HTTPS"],
    # Async
    "Promises": ["JavaScript"],
    "Async/Await": ["Promises", "JavaScript"],
    "Event Loop": ["JavaScript", "Node.js"],
    # Testing
    "Unit Testing": ["JavaScript"],
    "Integration Testing": ["Unit Testing", "Express.js"],
    "Jest": ["JavaScript", "Unit Testing"],
    # DevOps
    "Environment Variables": ["Node.js"],
    "Logging": ["Node.js"],
    "Deployment": ["Node.js", "Environment Variables"],
    "CI/CD Basics": ["Git", "Deployment"],
    "Docker": ["Node.js", "Deployment"],
    # Performance
    "Caching": ["Node.js"],
    "Rate Limiting": ["Express.js"],
    "Load Balancing": ["Deployment"],
    # Version control
    "Git": [],
    "GitHub": ["Git"],
    # Advanced
    "Message Queues": ["Node.js", "Async/Await"],
    "Microservices": ["REST APIs", "Docker"],
    "WebSockets": ["Node.js", "HTTP/HTTPS"],
    "TypeScript": ["JavaScript"],
}

_FULLSTACK = {
    "HTML": [],
    "CSS": ["HTML"],
    "JavaScript": ["HTML"],
    "Git": [],
    "GitHub": ["Git"],
    # Frontend basics
    "Responsive Design": ["CSS", "CSS Flexbox"],
    "CSS Flexbox": ["CSS"],
    "CSS Grid": ["CSS"],
    "Browser DevTools": ["HTML", "CSS", "JavaScript"],
    # JavaScript progression
    "ES6+": ["JavaScript"],
    "Async/Await": ["JavaScript", "ES6+"],
    "Fetch API": ["JavaScript", "Async/Await"],
    # React
    "React": ["JavaScript", "ES6+", "HTML", "CSS"],
    "State Management": ["React"],
    # Backend fundamentals
    "Node.js": ["JavaScript"],
    "HTTP/HTTPS": [],
    "REST APIs": ["HTTP/HTTPS", "JSON"],
    "Express.js": ["Node.js"],
    # Integration
    "RESTful Design": ["REST APIs", "Express.js"],
    "Error Handling": ["Express.js", "React"],
    # Databases
    "SQL": [],
    "Database Design": ["SQL"],
    "PostgreSQL": ["SQL", "Database Design"],
    "MongoDB": ["Node.js"],
    # Security
    "Authentication": ["Express.js", "HTTP/HTTPS"],
    "Authorization": ["Authentication"],
    "JWT": ["Authentication"],
    "Encryption": ["JavaScript"],
    # Build and deploy
    "npm/yarn": ["JavaScript"],
    "Webpack": ["npm/yarn", "JavaScript"],
    "Environment Variables": ["Node.js"],
    "Deployment": ["Node.js", "Environment Variables"],
    # Testing
    "Unit Testing": ["JavaScript"],
    "Integration Testing": ["Unit Testing", "Express.js"],
    "Jest": ["JavaScript", "Unit Testing"],
    # Performance
    "Caching": ["Node.js"],
    "Performance Optimization": ["JavaScript", "React"],
    "Rate Limiting": ["Express.js"],
    # Advanced
    "TypeScript": ["JavaScript", "ES6+"],
    "Docker": ["Node.js", "Deployment"],
    "Web Accessibility": ["HTML", "CSS"],
    "Logging": ["Node.js"],
}

PREREQUISITES: Mapping[Track, Mapping[str, tuple[str, ...]]] = MappingProxyType(
    {
        Track.FRONTEND: _freeze(_FRONTEND),
        Track.BACKEND: _freeze(_BACKEND),
        Track.FULLSTACK: _freeze(_FULLSTACK),
    }
)


def _graph_index(track: str) -> Optional[dict[str, tuple[str, ...]]]:
    """Track graph keyed by lowercased skill name, or None for unknown tracks."""
    graph = PREREQUISITES.get(track)
    if graph is None:
        return None
    return {skill.lower(): prereqs for skill, prereqs in graph.items()}


def get_prerequisites(track: str, skill: str) -> tuple[str, ...]:
    """Direct prerequisites of a skill; empty for unknown tracks or skills.

    Skill names match case-insensitively; prerequisites keep catalog spelling.
    """
    index = _graph_index(track)
    if index is None:
        return ()
    return index.get(skill.lower(), ())


def prerequisites_met(track: str, skill: str, learned: Iterable[str]) -> bool:
    learned_set = {s.lower() for s in learned}
    return all(p.lower() in learned_set for p in get_prerequisites(track, skill))


def get_learning_order(track: str, skill_names: Iterable[str]) -> list[str]:
    """Order skills so prerequisites inside the set come first.

    Layered passes over the remaining skills in input order: a skill is placed
    once each prerequisite is either placed already (including earlier in the
    same pass) or not part of the input. A pass that places nothing means a
    cycle or unresolvable chain, and the rest is appended alphabetically.
    Passes are capped at twice the input size.

    Names compare case-insensitively and come back spelled as given.
    """
    names: list[str] = []
    seen: set[str] = set()
    for name in skill_names:
        if name.lower() not in seen:
            seen.add(name.lower())
            names.append(name)
    index = _graph_index(track)
    if index is None:
        return names

    requested = seen
    placed: list[str] = []
    placed_set: set[str] = set()
    remaining = list(names)
    max_passes = len(names) * 2

    passes = 0
    while remaining and passes < max_passes:
        passes += 1
        still_waiting = []
        for skill in remaining:
            ready = all(
                prereq.lower() in placed_set or prereq.lower() not in requested
                for prereq in index.get(skill.lower(), ())
            )
            if ready:
                placed.append(skill)
                placed_set.add(skill.lower())
            else:
                still_waiting.append(skill)

        if len(still_waiting) == len(remaining):
            break
        remaining = still_waiting

    placed.extend(sorted(remaining))
    return placed


def get_suggested_next(
    track: str,
    current_skills: Iterable[str],
    gap_skills: Iterable[str],
    count: int = 3,
) -> list[Suggestion]:
    """Next skills to learn, walking gaps in learning order.

    A gap is suggested when all its prerequisites are known, or when exactly
    one is missing. Gaps missing two or more are skipped.
    """
    learned = {s.lower() for s in current_skills}
    suggestions: list[Suggestion] = []

    for skill in gap_skills:
        if len(suggestions) >= count:
            break
        prereqs = list(get_prerequisites(track, skill))
        missing = [p for p in prereqs if p.lower() not in learned]
        if not missing:
            suggestions.append(Suggestion(skill=skill, reason="prerequisites met", prerequisites=prereqs))
        elif len(missing) == 1:
            suggestions.append(
                Suggestion(
                    skill=skill,
                    reason=f"blocked by single prerequisite {missing[0]}",
                    prerequisites=prereqs,
                    missing=missing,
                )
            )

    return suggestions
