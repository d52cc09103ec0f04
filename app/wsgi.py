from app.travelsite import create_app

app = create_app()
