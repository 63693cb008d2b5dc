"""Profile shown when neither the API nor the local store has one."""

DEFAULT_PROFILE = {
    "name": "Harsh Bhardwaj",
    "tagline": "Creative Video Editor & Graphic Designer",
    "bio": "A passionate Video Editor and Graphic Designer with over 5 years of experience creating compelling visual content. I specialize in bringing stories to life through dynamic video editing, eye-catching motion graphics, and stunning visual design.",
    "photo_url": "",
    "email": "harsh.bhardwaj@example.com",
    "phone": "+91 9876543210",
    "location": "Mumbai, India",
    "youtube_url": "",
    "instagram_url": "",
    "behance_url": "",
    "linkedin_url": "",
}
