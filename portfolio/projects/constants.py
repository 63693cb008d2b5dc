"""
Project constants: the fixed category set and the sample portfolio shown
when neither the API nor the local store has any projects.
"""
from typing import Literal, get_args

Category = Literal["video", "motion", "design", "thumbnail"]

CATEGORIES: tuple[str, ...] = get_args(Category)

CATEGORY_LABELS = {
    "video": "Video Editing",
    "motion": "Motion Graphics",
    "design": "Graphic Design",
    "thumbnail": "Thumbnails",
}

DEFAULT_PROJECTS = [
    {
        "id": "1",
        "title": "Brand Commercial Edit",
        "category": "video",
        "description": "Dynamic commercial video with motion graphics and color grading for a tech startup. Featured advanced compositing, sound design, and seamless transitions.",
        "thumbnail": "https://images.unsplash.com/photo-1611162616475-46b635cb6868?w=500&h=300&fit=crop",
        "video_url": "",
        "external_links": "https://behance.net/project",
        "tags": ["commercial", "motion-graphics", "color-grading"],
        "featured": True,
        "created_at": "2024-01-10T08:00:00Z",
    },
    {
        "id": "2",
        "title": "Logo Animation Package",
        "category": "motion",
        "description": "Sleek 3D logo animation with particle effects, smooth transitions, and multiple format deliverables for social media and web use.",
        "thumbnail": "https://images.unsplash.com/photo-1611224923853-80b023f02d71?w=500&h=300&fit=crop",
        "video_url": "",
        "external_links": "https://dribbble.com/shots/project",
        "tags": ["logo", "3d", "animation", "branding"],
        "featured": True,
        "created_at": "2024-01-12T14:30:00Z",
    },
    {
        "id": "3",
        "title": "YouTube Thumbnails Pack",
        "category": "thumbnail",
        "description": "Eye-catching thumbnail designs that increased CTR by 150% for gaming channel. Includes A/B testing variations and brand consistency guidelines.",
        "thumbnail": "https://images.unsplash.com/photo-1611162617474-5b21e879e113?w=500&h=300&fit=crop",
        "video_url": "",
        "external_links": "https://instagram.com/post",
        "tags": ["youtube", "gaming", "ctr-optimization"],
        "featured": False,
        "created_at": "2024-01-14T16:45:00Z",
    },
    {
        "id": "4",
        "title": "Restaurant Brand Identity",
        "category": "design",
        "description": "Complete brand identity package including logo design, menu layouts, social media templates, and packaging design for a modern restaurant chain.",
        "thumbnail": "https://images.unsplash.com/photo-1565299624946-b28f40a0ca4b?w=500&h=300&fit=crop",
        "video_url": "",
        "external_links": "https://behance.net/restaurant-brand",
        "tags": ["branding", "restaurant", "identity", "packaging"],
        "featured": True,
        "created_at": "2024-01-08T11:20:00Z",
    },
]
