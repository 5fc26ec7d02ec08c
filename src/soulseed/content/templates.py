"""
Phrase pools for rules-based guidance.

Fragments are composed by the content planner; every pool is indexed with a
seed, so pool order matters for reproducibility.
"""

from __future__ import annotations

CRISIS_LINE = (
    "If you are thinking about hurting yourself or feel unsafe right now, "
    "please reach out to someone you trust or call a local crisis line; "
    "you do not have to carry this alone."
)

CLOSING_NUDGE = "Take it one small step at a time, and be gentle with yourself today."

# =============================================================================
# SUGGESTIONS
# =============================================================================

SLEEP_TIP = "Try a simple wind-down tonight: dim lights and no phone for 20 minutes"
EXAM_TIP = "Try short study blocks with 5-minute breaks in between"
TEAM_TIP = "Agree on one clear next step with your team and who owns it"

GENERAL_TIPS = [
    "Take a short walk and breathe slowly for 1 minute",
    "Write down the one task that matters most today",
    "Drink a glass of water and stretch for two minutes",
    "Message someone supportive and tell them how you are doing",
    "Put your phone in another room for a 20-minute focus block",
    "Break the next task into one tiny, concrete step",
]

ACTION_LEADS = [
    "One small thing to try: {tip}.",
    "If it helps, start here: {tip}.",
    "A gentle next step could be this: {tip}.",
]

# =============================================================================
# OPENERS — mood → variant pools, variant chosen by the style profile
# =============================================================================

OPENERS = {
    "overwhelmed": [
        [
            "It sounds like a lot is landing on you at once right now.",
            "That is a heavy load to be carrying all at the same time.",
            "It makes sense to feel stretched thin with so much going on.",
        ],
        [
            "When everything piles up together, feeling overwhelmed is a very human reaction.",
            "You are juggling more than anyone should have to juggle at once.",
            "Thank you for putting this into words; it clearly feels like too much right now.",
        ],
    ],
    "tired": [
        [
            "It sounds like your energy has been running really low lately.",
            "Being this worn out makes everything else feel harder than it is.",
            "You sound drained, and that deserves some care.",
        ],
        [
            "Running on empty takes a real toll on both your body and your mood.",
            "Tiredness like this is a signal worth listening to, not something to push through.",
            "It is hard to think clearly when rest keeps slipping away from you.",
        ],
    ],
    "low": [
        [
            "I am sorry things feel so heavy right now.",
            "It sounds like you have been feeling quite down lately.",
            "Feeling low like this can make even small things seem far away.",
        ],
        [
            "Thank you for sharing something this personal; low days are real and they matter.",
            "When your mood dips like this, it can be hard to see past today.",
            "You do not have to pretend to be fine when things feel this grey.",
        ],
    ],
    "frustrated": [
        [
            "It sounds like something has really been getting under your skin.",
            "That kind of frustration usually means something important to you is being blocked.",
            "Feeling annoyed about this makes a lot of sense.",
        ],
        [
            "Frustration like this often shows up when effort and results stop matching.",
            "It is tiring to keep running into the same wall again and again.",
            "Your irritation is telling you that something here needs to change.",
        ],
    ],
    "neutral": [
        [
            "Thanks for taking a moment to check in with yourself.",
            "It is good that you are paying attention to how things are going.",
            "Checking in like this is a helpful habit to keep.",
        ],
        [
            "Noticing where you are today is already a useful first step.",
            "It sounds like things are fairly steady, which is a good place to reflect from.",
            "Taking stock on an ordinary day can make the harder days easier.",
        ],
    ],
}

# =============================================================================
# BODY — topic sentences, checked in order
# =============================================================================

BODY_TOPICS = [
    ("exam", [
        "With exams and deadlines close together, it can help to focus only on the very next paper or task instead of the whole list.",
        "Study pressure tends to shrink when you pick one subject for the next hour and let the rest wait its turn.",
        "A lot of exam stress comes from holding every deadline in your head at once, so writing them down can free up some space.",
    ]),
    ("sleep", [
        "Sleep affects mood, focus and patience, so protecting even a little more rest tonight is worth it.",
        "When sleep keeps slipping, a calmer last half hour before bed often helps more than trying harder to fall asleep.",
    ]),
    ("team", [
        "Group work gets easier when everyone knows exactly who is doing what by when.",
        "Team tension often eases once the next step and its owner are said out loud.",
    ]),
]

BODY_GENERIC = [
    "It can help to narrow your focus to just one thing you can influence today and let the rest wait.",
    "Trying to fix everything at once is exhausting, so choosing one small area to focus on is a fair place to start.",
    "You do not need to solve it all today; picking one thing within your control is enough for now.",
]

# =============================================================================
# QUESTIONS — closing question pools, variant chosen by the style profile
# =============================================================================

ASK_POOLS = [
    [
        "What feels like the smallest step you could take in the next hour?",
        "What has helped you get through a similar week before?",
        "Who is one person you could lean on a little this week?",
        "What would make tomorrow feel even slightly lighter?",
    ],
    [
        "Which part of this feels most within your control right now?",
        "What would you tell a close friend who felt the same way?",
        "When did you last feel a bit more settled, and what was different then?",
        "What is one thing you could let go of for today?",
    ],
]

# =============================================================================
# FOLLOW-UP QUESTIONS — returned alongside the guidance
# =============================================================================

QUESTION_BANK = {
    "safety": [
        "Thanks for sharing this. Do you feel safe right now?",
        "Would you like help finding someone to talk to?",
    ],
    "exams": [
        "What part of studying feels most stressful right now?",
        "Would breaking tasks into tiny steps help? Which step could be first?",
        "Who could you study with for a short session?",
    ],
    "deadlines": [
        "Which deadline is closest, and what is the very next step for it?",
        "Is there anything you could ask for more time on?",
    ],
    "friends": [
        "How did time with your friends affect how you felt?",
        "Is there someone you feel safe sharing this with?",
    ],
    "sleep": [
        "What usually makes it easier to fall asleep for you?",
        "Would a short wind-down routine help tonight?",
    ],
    "family": [
        "Is there anything at home that made this tougher or easier?",
        "What kind of support would feel helpful from family?",
    ],
    "school": [
        "Which school task is taking the most energy right now?",
        "Would a 20-minute focus block help to get started?",
    ],
    "team": [
        "What does your team need to agree on first?",
        "Is there one teammate you could talk this through with?",
    ],
    "bullying": [
        "Have you been feeling unsafe around anyone?",
        "Who is a trusted adult you could talk to about this?",
    ],
    "low": [
        "What is one small thing that might make today 1% better?",
        "When did you last feel a bit lighter? What was different then?",
    ],
    "neutral": [
        "What would you like more of this week?",
        "Is there a small action that could keep things steady?",
    ],
    "general": [
        "What was the hardest part about today?",
        "When did you feel it most strongly?",
        "What helped even a little bit?",
        "If this feeling could talk, what would it say?",
    ],
}

# =============================================================================
# SUMMARY
# =============================================================================

MOOD_SUMMARIES = {
    "overwhelmed": "Signs of feeling overwhelmed",
    "tired": "Signs of tiredness and low energy",
    "low": "Low mood signs present",
    "frustrated": "Signs of frustration",
    "neutral": "Neutral mood overall",
}

RISK_SUMMARY = "Text shows distress signals; consider a gentle check-in"
