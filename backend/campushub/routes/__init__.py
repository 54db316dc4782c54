"""
CampusHub Backend — Route Handlers
====================================

    auth.py      POST /signup, /login, /clublogin, /logout
    projects.py  GET /listings, POST /makeproj
    clubs.py     GET /clubpost, GET /clubpost/{id}/poster, POST /clublisting
    profiles.py  GET|POST /userpage, GET /people, GET /userdetails/{fullName}
    health.py    GET /health
    spa.py       GET /{path}: built frontend, registered last
"""
