"""
Script para criar (ou promover) um usuário administrador
Execute: python create_admin.py email@exemplo.com [senha]
"""
import sys

from app import create_app, db
from app.models import User

def create_admin(email, password=None):
    app = create_app()

    with app.app_context():
        db.create_all()

        # Verificar se o usuário já existe
        user = User.query.filter_by(email=email.lower()).first()

        if user:
            print(f"⚠️  Usuário {email} já existe, promovendo a admin")
            user.role = User.ROLE_ADMIN
            if password:
                user.set_password(password)
        else:
            if not password:
                print("❌ Informe a senha para criar um novo admin")
                return False

            user = User(name='Admin', email=email.lower(), role=User.ROLE_ADMIN)
            user.set_password(password)
            db.session.add(user)

        db.session.commit()
        print(f"✅ Admin pronto: {user.email}")
        return True

if __name__ == '__main__':
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    ok = create_admin(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else None)
    sys.exit(0 if ok else 1)
