from minisocial.database import Base, engine
from minisocial.models import user, post, post_like  # noqa: F401

print("Creating database tables...")
Base.metadata.create_all(bind=engine)
print("All tables created successfully!")
