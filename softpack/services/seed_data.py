"""Built-in catalog shown when nothing has been saved yet"""

DEFAULT_GAMES = [
    {
        "id": "1",
        "name": "CS:GO",
        "description": "Counter-Strike: Global Offensive",
        "image": "https://cdn.cloudflare.steamstatic.com/steam/apps/730/header.jpg",
        "downloads": 1250,
        "createdAt": "2024-01-15",
    },
    {
        "id": "2",
        "name": "Valorant",
        "description": "Valorant",
        "image": "https://cdn.cloudflare.steamstatic.com/steam/apps/1172470/header.jpg",
        "downloads": 980,
        "createdAt": "2024-01-20",
    },
    {
        "id": "3",
        "name": "GTA V",
        "description": "Grand Theft Auto V",
        "image": "https://cdn.cloudflare.steamstatic.com/steam/apps/271590/header.jpg",
        "downloads": 2100,
        "createdAt": "2024-01-10",
    },
]

DEFAULT_CHEATS = [
    {
        "id": "1",
        "gameId": "1",
        "name": "Aimbot Pro",
        "description": "Powerful aimbot for CS:GO",
        "url": "#",
        "image": "https://i.imgur.com/placeholder1.jpg",
        "downloads": 450,
        "createdAt": "2024-01-16",
        "tags": ["aimbot", "legit"],
    },
    {
        "id": "2",
        "gameId": "1",
        "name": "Wallhack X",
        "description": "See enemies through walls",
        "url": "#",
        "image": "https://i.imgur.com/placeholder2.jpg",
        "downloads": 320,
        "createdAt": "2024-01-17",
        "tags": ["wallhack", "visual"],
    },
    {
        "id": "3",
        "gameId": "2",
        "name": "ESP Vision",
        "description": "Shows enemies and items",
        "url": "#",
        "image": "https://i.imgur.com/placeholder3.jpg",
        "downloads": 280,
        "createdAt": "2024-01-21",
        "tags": ["esp", "visual"],
    },
    {
        "id": "4",
        "gameId": "3",
        "name": "Money Hack",
        "description": "Adds money in GTA V",
        "url": "#",
        "image": "https://i.imgur.com/placeholder4.jpg",
        "downloads": 890,
        "createdAt": "2024-01-11",
        "tags": ["money", "economy"],
    },
]
