from sqlalchemy.orm import declarative_base

# Instância base usada pelos modelos
Base = declarative_base()
