import os
from dotenv import load_dotenv
from app import create_app, db

# Load environment variables
load_dotenv()

# Create application
app = create_app(os.getenv('FLASK_ENV', 'development'))


@app.shell_context_processor
def make_shell_context():
    """Make database and models available in Flask shell"""
    from app.models.user import User
    from app.models.job import Job
    from app.models.balance_transaction import BalanceTransaction
    from app.models.job_impression import JobImpression

    return {
        'db': db,
        'User': User,
        'Job': Job,
        'BalanceTransaction': BalanceTransaction,
        'JobImpression': JobImpression
    }


if __name__ == '__main__':
    port = int(os.getenv('PORT', 5000))
    # Only enable debug mode in development
    debug_mode = os.getenv('FLASK_ENV') == 'development'
    app.run(host='0.0.0.0', port=port, debug=debug_mode)
