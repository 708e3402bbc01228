SAMPLE_EVENTS = [
    {
        "title": "Tech Meetup Mumbai",
        "description": "Join us for an exciting tech meetup discussing the latest in AI and web development",
        "location": "Mumbai, Maharashtra",
        "date": "2024-01-15T18:00:00Z",
        "maxParticipants": 50,
        "currentParticipants": 23,
    },
    {
        "title": "Startup Pitch Night",
        "description": "Watch innovative startups pitch their ideas to investors",
        "location": "Bangalore, Karnataka",
        "date": "2024-01-20T19:30:00Z",
        "maxParticipants": 100,
        "currentParticipants": 67,
    },
    {
        "title": "Photography Workshop",
        "description": "Learn professional photography techniques from industry experts",
        "location": "Delhi, India",
        "date": "2024-01-25T10:00:00Z",
        "maxParticipants": 30,
        "currentParticipants": 15,
    },
]
