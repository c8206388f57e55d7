from jobboard import create_app

# Create an app instance
app = create_app()

if __name__ == '__main__':
    # One request at a time; the stores rewrite whole documents on every change
    print(f"Server running at http://localhost:{app.config['PORT']}/")
    app.run(host=app.config['HOST'], port=app.config['PORT'], threaded=False)
