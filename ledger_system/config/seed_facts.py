"""Seed catalogue of tracked facts with their revision histories.

Each entry describes one fact, the outlets backing it, the keys of related
facts and its revisions. Revisions are listed newest first (display order);
the seeder writes them oldest first. The oldest revision of every entry is
the initial one. Revision times are ages in hours relative to the moment of
seeding; a fact's last update is the time of its newest revision.
"""

from typing import Any, Dict, List

HOUR = 1
DAY = 24

SEED_FACTS: List[Dict[str, Any]] = [
    {
        "key": "fed-rate",
        "headline": "Federal Funds Rate",
        "current_value": "4.25–4.50% (held)",
        "category": "economy",
        "importance": "breaking",
        "confidence": "confirmed",
        "tags": ["federal-reserve", "interest-rates", "monetary-policy"],
        "related_keys": ["cpi", "treasury", "unemployment"],
        "sources": [
            {"name": "Federal Reserve", "url": "https://federalreserve.gov", "tier": "primary"},
            {"name": "Reuters", "url": "https://reuters.com", "tier": "wire"},
        ],
        "revisions": [
            {
                "age_hours": 2 * HOUR,
                "previous_value": "Market expected 25bp cut",
                "new_value": "4.25–4.50% (held)",
                "delta": "Rate held steady, first hold after 3 consecutive cuts",
                "why_it_matters": "The Fed's pause signals renewed concern about inflation persistence, pushing back expectations for further easing into late 2026.",
                "revision_type": "update",
                "source_name": "Federal Reserve",
                "source_url": "https://federalreserve.gov",
                "source_tier": "primary",
            },
            {
                "age_hours": 30 * DAY,
                "previous_value": "4.50–4.75%",
                "new_value": "4.25–4.50%",
                "delta": "Third consecutive 25bp cut",
                "why_it_matters": "The January cut completed a 75bp easing cycle begun in late 2025, bringing rates to their lowest since early 2023.",
                "revision_type": "update",
                "source_name": "Federal Reserve",
                "source_tier": "primary",
            },
            {
                "age_hours": 60 * DAY,
                "previous_value": "4.75–5.00%",
                "new_value": "4.50–4.75%",
                "delta": "Second consecutive 25bp cut",
                "why_it_matters": "Back-to-back cuts confirmed the Fed's pivot toward accommodation as labor market data softened.",
                "revision_type": "update",
                "source_name": "Federal Reserve",
                "source_tier": "primary",
            },
            {
                "age_hours": 90 * DAY,
                "previous_value": None,
                "new_value": "4.75–5.00%",
                "delta": "First cut since 2020",
                "why_it_matters": "The Fed's initial rate cut marked the end of the most aggressive tightening cycle in four decades.",
                "revision_type": "initial",
                "source_name": "Federal Reserve",
                "source_tier": "primary",
            },
        ],
    },
    {
        "key": "cpi",
        "headline": "US CPI Inflation Rate",
        "current_value": "3.1% (Jan 2026)",
        "category": "economy",
        "importance": "high",
        "confidence": "confirmed",
        "tags": ["inflation", "cpi", "consumer-prices"],
        "related_keys": ["fed-rate", "treasury"],
        "sources": [
            {"name": "Bureau of Labor Statistics", "url": "https://bls.gov", "tier": "primary"},
            {"name": "AP", "url": "https://apnews.com", "tier": "wire"},
        ],
        "revisions": [
            {
                "age_hours": 6 * HOUR,
                "previous_value": "2.9% (Dec 2025)",
                "new_value": "3.1% (Jan 2026)",
                "delta": "Inflation ticked up 0.2pp to 3.1%",
                "why_it_matters": "The uptick complicates the Fed's path and may have contributed to their decision to hold rates steady.",
                "revision_type": "update",
                "source_name": "Bureau of Labor Statistics",
                "source_tier": "primary",
            },
            {
                "age_hours": 32 * DAY,
                "previous_value": None,
                "new_value": "2.9% (Dec 2025)",
                "delta": "CPI at 2.9%, lowest in over a year",
                "why_it_matters": "Falling inflation supported the case for the Fed's third consecutive rate cut.",
                "revision_type": "initial",
                "source_name": "Bureau of Labor Statistics",
                "source_tier": "primary",
            },
        ],
    },
    {
        "key": "ukraine",
        "headline": "Ukraine-Russia Ceasefire Status",
        "current_value": "72-hour ceasefire in effect (expires Feb 26)",
        "category": "geopolitics",
        "importance": "breaking",
        "confidence": "developing",
        "tags": ["ukraine", "russia", "ceasefire", "conflict"],
        "related_keys": [],
        "sources": [
            {"name": "Reuters", "url": "https://reuters.com", "tier": "wire"},
            {"name": "AP", "url": "https://apnews.com", "tier": "wire"},
            {"name": "Turkish Foreign Ministry", "tier": "primary"},
        ],
        "revisions": [
            {
                "age_hours": 4 * HOUR,
                "previous_value": "Ceasefire negotiations ongoing in Istanbul",
                "new_value": "72-hour ceasefire in effect",
                "delta": "Talks → active ceasefire agreed",
                "why_it_matters": "First formal ceasefire since the conflict began, brokered by Turkey with US and EU backing.",
                "revision_type": "escalation",
                "source_name": "Reuters",
                "source_tier": "wire",
            },
            {
                "age_hours": 3 * DAY,
                "previous_value": None,
                "new_value": "Ceasefire negotiations ongoing in Istanbul",
                "delta": "Talks opened in Istanbul",
                "why_it_matters": "Diplomatic progress after months of stalemate on the eastern front.",
                "revision_type": "initial",
                "source_name": "AP",
                "source_tier": "wire",
            },
        ],
    },
    {
        "key": "apple-chip",
        "headline": "Apple Custom AI Server Chip",
        "current_value": "In-house AI inference chip confirmed for 2026 deployment",
        "category": "technology",
        "importance": "high",
        "confidence": "developing",
        "tags": ["apple", "ai", "chips", "hardware"],
        "related_keys": [],
        "sources": [
            {"name": "The Information", "tier": "reporting"},
            {"name": "Bloomberg", "url": "https://bloomberg.com", "tier": "reporting"},
        ],
        "revisions": [
            {
                "age_hours": 28 * HOUR,
                "previous_value": "Rumored internal chip project",
                "new_value": "Confirmed for 2026 deployment",
                "delta": "Rumor → confirmed timeline",
                "why_it_matters": "Apple building its own AI server chips reduces dependence on Nvidia and could reshape the AI infrastructure market.",
                "revision_type": "update",
                "source_name": "The Information",
                "source_tier": "reporting",
            },
            {
                "age_hours": 14 * DAY,
                "previous_value": None,
                "new_value": "Rumored internal chip project",
                "delta": "Initial report of Apple AI chip development",
                "why_it_matters": "Would make Apple the latest tech giant to design custom AI silicon, joining Google and Amazon.",
                "revision_type": "initial",
                "source_name": "Bloomberg",
                "source_tier": "reporting",
            },
        ],
    },
    {
        "key": "eu-ai",
        "headline": "EU AI Act Enforcement",
        "current_value": "First penalties issued against 2 companies for prohibited AI practices",
        "category": "technology",
        "importance": "high",
        "confidence": "confirmed",
        "tags": ["eu", "ai-regulation", "compliance", "policy"],
        "related_keys": [],
        "sources": [
            {"name": "European Commission", "tier": "primary"},
        ],
        "revisions": [
            {
                "age_hours": 8 * HOUR,
                "previous_value": "Enforcement period active, no penalties yet",
                "new_value": "First penalties issued against 2 companies",
                "delta": "0 penalties → 2 companies fined",
                "why_it_matters": "First enforcement action under the AI Act signals regulators are serious about compliance timelines.",
                "revision_type": "escalation",
                "source_name": "European Commission",
                "source_tier": "primary",
            },
            {
                "age_hours": 22 * DAY,
                "previous_value": None,
                "new_value": "Enforcement period active, no penalties yet",
                "delta": "AI Act enforcement officially started Feb 2, 2026",
                "why_it_matters": "Prohibited AI practices (social scoring, real-time biometric surveillance) now carry penalties up to €35M.",
                "revision_type": "initial",
                "source_name": "European Commission",
                "source_tier": "primary",
            },
        ],
    },
    {
        "key": "treasury",
        "headline": "10-Year Treasury Yield",
        "current_value": "4.41%",
        "category": "economy",
        "importance": "medium",
        "confidence": "confirmed",
        "tags": ["treasury", "bonds", "yield", "rates"],
        "related_keys": ["fed-rate"],
        "sources": [
            {"name": "U.S. Treasury", "tier": "primary"},
        ],
        "revisions": [
            {
                "age_hours": 1 * HOUR,
                "previous_value": "4.35%",
                "new_value": "4.41%",
                "delta": "Yield up 6bp to 4.41%",
                "why_it_matters": "Yields rose after the Fed held rates, reflecting market repricing of the rate-cut timeline.",
                "revision_type": "update",
                "source_name": "U.S. Treasury",
                "source_tier": "primary",
            },
            {
                "age_hours": 7 * DAY,
                "previous_value": None,
                "new_value": "4.35%",
                "delta": "Tracking began at 4.35%",
                "why_it_matters": "The 10-year yield anchors mortgage and corporate borrowing costs.",
                "revision_type": "initial",
                "source_name": "U.S. Treasury",
                "source_tier": "primary",
            },
        ],
    },
    {
        "key": "scs",
        "headline": "South China Sea: Philippines Standoff",
        "current_value": "Philippine Coast Guard reports 3 new blockade incidents at Second Thomas Shoal",
        "category": "geopolitics",
        "importance": "medium",
        "confidence": "confirmed",
        "tags": ["south-china-sea", "philippines", "china", "territorial"],
        "related_keys": [],
        "sources": [
            {"name": "Philippine Coast Guard", "tier": "primary"},
            {"name": "Reuters", "url": "https://reuters.com", "tier": "wire"},
        ],
        "revisions": [
            {
                "age_hours": 36 * HOUR,
                "previous_value": "Tensions elevated after water cannon incident",
                "new_value": "3 new blockade incidents reported",
                "delta": "Single incident → pattern of blockades",
                "why_it_matters": "Repeated blockades of resupply missions to BRP Sierra Madre risk triggering the US-Philippines mutual defense treaty.",
                "revision_type": "escalation",
                "source_name": "Philippine Coast Guard",
                "source_tier": "primary",
            },
            {
                "age_hours": 12 * DAY,
                "previous_value": None,
                "new_value": "Tensions elevated after water cannon incident",
                "delta": "Water cannon used against a resupply vessel",
                "why_it_matters": "Direct use of force against a treaty ally's vessel raised the stakes of the standoff.",
                "revision_type": "initial",
                "source_name": "Reuters",
                "source_tier": "wire",
            },
        ],
    },
    {
        "key": "quantum",
        "headline": "Google Quantum Computing: Willow Chip",
        "current_value": "Demonstrated quantum error correction below threshold on 105-qubit chip",
        "category": "technology",
        "importance": "medium",
        "confidence": "confirmed",
        "tags": ["quantum", "google", "computing", "research"],
        "related_keys": [],
        "sources": [
            {"name": "Nature", "tier": "primary"},
            {"name": "Google AI Blog", "tier": "primary"},
        ],
        "revisions": [
            {
                "age_hours": 3 * DAY,
                "previous_value": "105-qubit Willow chip announced",
                "new_value": "Error correction below threshold demonstrated",
                "delta": "Chip announced → error correction breakthrough verified",
                "why_it_matters": "Achieving below-threshold error correction is a critical milestone toward practical quantum computing.",
                "revision_type": "update",
                "source_name": "Nature",
                "source_tier": "primary",
            },
            {
                "age_hours": 10 * DAY,
                "previous_value": None,
                "new_value": "105-qubit Willow chip announced",
                "delta": "Google unveiled next-gen quantum chip",
                "why_it_matters": "Willow represents a significant jump in qubit count and coherence time over Google's previous Sycamore chip.",
                "revision_type": "initial",
                "source_name": "Google AI Blog",
                "source_tier": "primary",
            },
        ],
    },
    {
        "key": "unemployment",
        "headline": "US Unemployment Rate",
        "current_value": "4.1% (Jan 2026)",
        "category": "economy",
        "importance": "medium",
        "confidence": "confirmed",
        "tags": ["unemployment", "jobs", "labor-market"],
        "related_keys": ["fed-rate", "cpi"],
        "sources": [
            {"name": "Bureau of Labor Statistics", "url": "https://bls.gov", "tier": "primary"},
        ],
        "revisions": [
            {
                "age_hours": 5 * DAY,
                "previous_value": "4.0%",
                "new_value": "4.1%",
                "delta": "Unemployment ticked up 0.1pp to 4.1%",
                "why_it_matters": "Slight rise remains within historical norms but adds to the mixed economic picture.",
                "revision_type": "update",
                "source_name": "Bureau of Labor Statistics",
                "source_tier": "primary",
            },
            {
                "age_hours": 35 * DAY,
                "previous_value": None,
                "new_value": "4.0%",
                "delta": "Unemployment steady at 4.0%",
                "why_it_matters": "A stable labor market gave the Fed room to keep cutting.",
                "revision_type": "initial",
                "source_name": "Bureau of Labor Statistics",
                "source_tier": "primary",
            },
        ],
    },
    {
        "key": "tiktok",
        "headline": "TikTok US Operations",
        "current_value": "Operating under 90-day extension; ByteDance divestiture deadline Apr 2026",
        "category": "technology",
        "importance": "high",
        "confidence": "developing",
        "tags": ["tiktok", "bytedance", "ban", "social-media"],
        "related_keys": [],
        "sources": [
            {"name": "White House", "tier": "primary"},
            {"name": "AP", "url": "https://apnews.com", "tier": "wire"},
        ],
        "revisions": [
            {
                "age_hours": 2 * DAY,
                "previous_value": "Executive order granted 75-day extension",
                "new_value": "90-day extension; divestiture deadline Apr 2026",
                "delta": "75-day → 90-day extension granted",
                "why_it_matters": "Extended timeline gives potential buyers more negotiation room but keeps forced-sale pressure on ByteDance.",
                "revision_type": "update",
                "source_name": "White House",
                "source_tier": "primary",
            },
            {
                "age_hours": 30 * DAY,
                "previous_value": None,
                "new_value": "Executive order grants 75-day extension",
                "delta": "Ban upheld → temporary reprieve via executive order",
                "why_it_matters": "Executive action delays enforcement despite Supreme Court ruling, creating legal uncertainty.",
                "revision_type": "initial",
                "source_name": "AP",
                "source_tier": "wire",
            },
        ],
    },
    {
        "key": "china-gdp",
        "headline": "China GDP Growth (2025)",
        "current_value": "Official: 5.2%, independent estimates: 2.5–3.8%",
        "category": "economy",
        "importance": "medium",
        "confidence": "disputed",
        "tags": ["china", "gdp", "economy", "disputed"],
        "related_keys": [],
        "sources": [
            {"name": "National Bureau of Statistics of China", "tier": "primary"},
            {"name": "Rhodium Group", "tier": "analysis"},
        ],
        "revisions": [
            {
                "age_hours": 4 * DAY,
                "previous_value": "Official: 5.0% (Q3 2025)",
                "new_value": "Official: 5.2%, independent: 2.5–3.8%",
                "delta": "Independent estimates diverge sharply from official figures",
                "why_it_matters": "Growing gap between official and independent estimates raises questions about the reliability of China's economic data.",
                "revision_type": "update",
                "source_name": "Rhodium Group",
                "source_tier": "analysis",
            },
            {
                "age_hours": 20 * DAY,
                "previous_value": None,
                "new_value": "Official: 5.0% (Q3 2025)",
                "delta": "Official Q3 growth published at 5.0%",
                "why_it_matters": "The official figure sits exactly on Beijing's annual target.",
                "revision_type": "initial",
                "source_name": "National Bureau of Statistics of China",
                "source_tier": "primary",
            },
        ],
    },
]
