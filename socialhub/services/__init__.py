# Services package init
"""
SocialHub Backend - Services Layer
====================================

Service Inventory:
    - PostService: the eight post/like/comment operations
    - rejections:  Rejection values and the guard clauses that produce them
"""
